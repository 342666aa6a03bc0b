"""
Git integration: environment detection and diff resolution.
"""

from threadline.git.client import GitClient
from threadline.git.environment import CIProvider, Environment, detect_environment
from threadline.git.resolver import DiffResolver

__all__ = [
    "GitClient",
    "CIProvider",
    "Environment",
    "detect_environment",
    "DiffResolver",
]
