import asyncio

import pytest

from threadline.core.utils.timeout import DeadlineExceededError, detached_count, execute_with_deadline


@pytest.mark.asyncio
async def test_returns_result_before_deadline() -> None:
    async def fast() -> str:
        return "done"

    assert await execute_with_deadline(fast(), timeout=1.0) == "done"


@pytest.mark.asyncio
async def test_propagates_operation_errors() -> None:
    async def broken() -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        await execute_with_deadline(broken(), timeout=1.0)


@pytest.mark.asyncio
async def test_overrun_raises_without_cancelling() -> None:
    """The deadline stops the wait; the operation itself runs to completion."""
    before = detached_count()
    finished = asyncio.Event()

    async def slow() -> str:
        await asyncio.sleep(0.05)
        finished.set()
        return "late"

    with pytest.raises(DeadlineExceededError) as exc_info:
        await execute_with_deadline(slow(), timeout=0.01, timeout_message="too slow")

    assert exc_info.value.timeout == 0.01
    assert str(exc_info.value) == "too slow"
    assert detached_count() == before + 1

    await asyncio.wait_for(finished.wait(), timeout=1.0)
    await asyncio.sleep(0.01)
    assert detached_count() == before


@pytest.mark.asyncio
async def test_deadline_error_is_a_timeout_error() -> None:
    async def slow() -> None:
        await asyncio.sleep(0.05)

    with pytest.raises(TimeoutError, match="timed out after"):
        await execute_with_deadline(slow(), timeout=0.01)

    await asyncio.sleep(0.06)
