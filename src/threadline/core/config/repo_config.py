"""
Repository configuration.
"""

from dataclasses import dataclass


@dataclass
class RepoConfig:
    """Repository configuration."""

    rules_directory: str = "threadlines"
    rule_file_suffix: str = ".md"
