"""
Threadline: evaluate code changes against natural-language rules.
"""

__version__ = "0.1.0"
