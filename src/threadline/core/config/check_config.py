"""
Check configuration.
"""

from dataclasses import dataclass


@dataclass
class CheckConfig:
    """Settings for diff resolution and rule dispatch."""

    timeout_seconds: float = 40.0
    trunk_branch: str = "main"
    git_remote: str = "origin"
    diff_context_lines: int = 200
