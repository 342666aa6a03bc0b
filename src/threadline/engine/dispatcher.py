"""
Rule dispatch.

Every rule gets exactly one TaskOutcome, written into a slot pre-sized to the
rule list, so ``outcomes[i]`` always belongs to ``rules[i]`` whatever order
tasks finish in. Matching rules run concurrently with no cap; each one is
bounded by its own deadline. Nothing a task raises escapes it.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, cast

from threadline.core.config import config
from threadline.core.models import DiffContext
from threadline.core.utils.patterns import filter_matching
from threadline.core.utils.timeout import DeadlineExceededError, execute_with_deadline
from threadline.engine.models import EvaluationTask, TaskOutcome
from threadline.llm.prompts import create_evaluation_prompt
from threadline.rules.models import Rule

if TYPE_CHECKING:
    from threadline.llm.client import CompletionClient

logger = logging.getLogger(__name__)


def build_tasks(rules: list[Rule], diff: DiffContext) -> list[EvaluationTask | None]:
    """Match every rule against the changed files; None marks a rule with no match."""
    tasks: list[EvaluationTask | None] = []
    for rule in rules:
        matched = filter_matching(diff.changed_files, rule.patterns)
        tasks.append(EvaluationTask(rule=rule, matched_files=matched) if matched else None)
    return tasks


async def _run_task(
    task: EvaluationTask,
    diff: DiffContext,
    client: CompletionClient,
    timeout: float,
) -> TaskOutcome:
    start_time = time.time()
    rule = task.rule

    try:
        prompt = create_evaluation_prompt(rule, diff.diff_text, task.matched_files)
        result = await execute_with_deadline(
            client.evaluate(task, prompt, diff.diff_text),
            timeout=timeout,
            timeout_message=f"Rule '{rule.id}' timed out after {timeout:g}s",
        )
    except DeadlineExceededError:
        return TaskOutcome.timed_out(rule, timeout)
    except Exception as e:
        logger.error(f"❌ Evaluation failed for rule '{rule.id}': {e}")
        return TaskOutcome.errored(rule, e)

    execution_time = (time.time() - start_time) * 1000
    logger.info(f"🧠 Rule '{rule.id}' evaluated as {result.status.value} in {execution_time:.2f}ms")
    return TaskOutcome.completed(result)


async def dispatch(
    rules: list[Rule],
    diff: DiffContext,
    client: CompletionClient,
    timeout: float | None = None,
) -> list[TaskOutcome]:
    """
    Evaluate every rule against the diff.

    Args:
        rules: Rules in caller order
        diff: The resolved change
        client: Completion client shared by all tasks
        timeout: Per-task deadline in seconds (defaults to the configured check timeout)

    Returns:
        One TaskOutcome per rule, index-aligned with ``rules``
    """
    timeout = config.check.timeout_seconds if timeout is None else timeout
    outcomes: list[TaskOutcome | None] = [None] * len(rules)
    tasks = build_tasks(rules, diff)

    async def fill(index: int, task: EvaluationTask) -> None:
        outcomes[index] = await _run_task(task, diff, client, timeout)

    pending = []
    for index, (rule, task) in enumerate(zip(rules, tasks, strict=True)):
        if task is None:
            outcomes[index] = TaskOutcome.skipped(rule)
        else:
            pending.append(fill(index, task))

    logger.info(f"🔧 Dispatching {len(pending)} of {len(rules)} rules (timeout {timeout:g}s)")
    if pending:
        await asyncio.gather(*pending)

    return cast("list[TaskOutcome]", outcomes)
