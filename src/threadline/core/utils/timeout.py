"""
Timeout utilities for async operations.

Unlike ``asyncio.wait_for``, the deadline here only stops *waiting*: an
operation that overruns is detached and left to finish on its own, and its
result is never read.
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)

# Strong references to detached operations so the event loop keeps them alive.
_DETACHED: set[asyncio.Future[Any]] = set()


class DeadlineExceededError(TimeoutError):
    """Raised when an operation does not finish before its deadline."""

    def __init__(self, message: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(message)


def _on_detached_done(future: asyncio.Future[Any]) -> None:
    _DETACHED.discard(future)
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.debug(f"Detached operation failed after its deadline: {exc}")


def detached_count() -> int:
    """Number of overrun operations still running in the background."""
    return len(_DETACHED)


async def execute_with_deadline(
    coro: Coroutine[Any, Any, Any],
    timeout: float = 30.0,
    timeout_message: str | None = None,
) -> Any:
    """
    Execute a coroutine, giving up on it once the deadline passes.

    Args:
        coro: The coroutine to execute
        timeout: Deadline in seconds
        timeout_message: Custom message for the timeout exception

    Returns:
        The result of the coroutine

    Raises:
        DeadlineExceededError: If the deadline passes first. The coroutine
            keeps running in the background.

    Example:
        result = await execute_with_deadline(
            client.evaluate(task, prompt),
            timeout=40.0,
        )
    """
    future = asyncio.ensure_future(coro)
    done, _ = await asyncio.wait({future}, timeout=timeout)

    if future in done:
        return future.result()

    _DETACHED.add(future)
    future.add_done_callback(_on_detached_done)

    msg = timeout_message or f"Operation timed out after {timeout} seconds"
    logger.warning(f"⏰ {msg}")
    raise DeadlineExceededError(msg, timeout)
