"""
Structured logging utilities.

Provides logging setup and a context manager for structured operation logging
with timing, error tracking, and metadata.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from threadline.core.config.logging_config import LoggingConfig

logger = logging.getLogger(__name__)


def configure_logging(logging_config: LoggingConfig) -> None:
    """Configure the root logger from the logging settings."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logging_config.file_path:
        handlers.append(logging.FileHandler(logging_config.file_path))

    logging.basicConfig(
        level=logging_config.level.upper(),
        format=logging_config.format,
        handlers=handlers,
    )


@asynccontextmanager
async def log_operation(
    operation: str,
    subject_ids: dict[str, str] | None = None,
    **context: Any,
) -> Any:  # AsyncGenerator[None, None]
    """
    Context manager for structured operation logging.

    Logs operation start, completion, and errors with timing information.

    Args:
        operation: Name of the operation being performed
        subject_ids: Dictionary of subject identifiers (e.g., {"environment": "pr"})
        **context: Additional context to include in logs

    Example:
        async with log_operation("threadline_check", rules=len(rules)):
            report = await run_check(...)
    """
    start_time = time.time()
    log_context = {
        "operation": operation,
        **(subject_ids or {}),
        **context,
    }

    logger.info(f"🚀 Starting {operation}", extra=log_context)

    try:
        yield
    except Exception as e:
        latency_ms = int((time.time() - start_time) * 1000)
        logger.error(
            f"❌ {operation} failed after {latency_ms}ms",
            extra={**log_context, "error": str(e), "latency_ms": latency_ms},
            exc_info=True,
        )
        raise
    else:
        latency_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"✅ {operation} completed in {latency_ms}ms",
            extra={**log_context, "latency_ms": latency_ms},
        )
