"""
Shared utilities for pattern matching, logging, and timeout handling.
"""

from threadline.core.utils.logging import configure_logging, log_operation
from threadline.core.utils.patterns import filter_matching, matches, matches_any
from threadline.core.utils.timeout import DeadlineExceededError, execute_with_deadline

__all__ = [
    "configure_logging",
    "log_operation",
    "filter_matching",
    "matches",
    "matches_any",
    "DeadlineExceededError",
    "execute_with_deadline",
]
