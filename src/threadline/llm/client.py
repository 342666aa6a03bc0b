"""
Completion client for rule evaluation.

Sends one rendered prompt to the chat model and turns its JSON answer into an
EvaluationResult. An absent or unparseable answer raises; a parseable answer
with a bad ``status`` degrades to not_relevant.
"""

import json
import logging
from typing import Any

from langchain_core.messages import HumanMessage, SystemMessage

from threadline.core.errors import MalformedResponseError, NoResponseError
from threadline.core.models import EvaluationResult, EvaluationStatus
from threadline.engine.models import EvaluationTask
from threadline.integrations.providers import get_chat_model
from threadline.llm.prompts import get_evaluation_system_prompt

logger = logging.getLogger(__name__)

AGENT_NAME = "check_agent"


class CompletionClient:
    """Evaluates prompts against a LangChain chat model."""

    def __init__(self, llm: Any) -> None:
        self.llm = llm

    async def evaluate(self, task: EvaluationTask, prompt: str, diff_text: str = "") -> EvaluationResult:
        """
        Ask the backend for one rule's verdict.

        Raises:
            NoResponseError: The backend returned no content.
            MalformedResponseError: The content is not a JSON object.
        """
        messages = [SystemMessage(content=get_evaluation_system_prompt()), HumanMessage(content=prompt)]
        response = await self.llm.ainvoke(messages)

        content = _message_text(response)
        if not content.strip():
            raise NoResponseError(f"No response from completion backend for rule '{task.rule.id}'")

        parsed = parse_response_content(content)
        return build_result(task, parsed, diff_text)


def _message_text(response: Any) -> str:
    content = getattr(response, "content", response)
    if content is None:
        return ""
    if isinstance(content, list):
        parts = [part.get("text", "") if isinstance(part, dict) else str(part) for part in content]
        return "".join(parts)
    return str(content)


def parse_response_content(content: str) -> dict[str, Any]:
    """Parse the backend's answer into a JSON object."""
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Completion backend returned invalid JSON: {e}", content) from e

    if not isinstance(parsed, dict):
        raise MalformedResponseError(
            f"Completion backend returned {type(parsed).__name__}, expected a JSON object", content
        )
    return parsed


def _coerce_line_references(value: Any) -> list[int] | None:
    if not isinstance(value, list):
        return None

    references = []
    for item in value:
        if isinstance(item, bool):
            continue
        try:
            references.append(int(item))
        except (TypeError, ValueError):
            continue
    return references


def build_result(task: EvaluationTask, parsed: dict[str, Any], diff_text: str = "") -> EvaluationResult:
    """Turn a parsed backend answer into an EvaluationResult."""
    raw_status = parsed.get("status")
    status = EvaluationStatus.parse(raw_status)
    if status == EvaluationStatus.NOT_RELEVANT and raw_status != EvaluationStatus.NOT_RELEVANT.value:
        logger.warning(f"⚠️ Rule '{task.rule.id}' returned unusable status {raw_status!r}, using not_relevant")

    reasoning = parsed.get("reasoning")
    raw_line_references = parsed.get("line_references")
    line_references = _coerce_line_references(raw_line_references)

    file_references = list(task.matched_files)
    if isinstance(raw_line_references, list):
        in_diff = [path for path in task.matched_files if path in diff_text]
        if in_diff:
            file_references = in_diff

    return EvaluationResult(
        rule_id=task.rule.id,
        status=status,
        reasoning=reasoning if isinstance(reasoning, str) else None,
        line_references=line_references,
        file_references=file_references,
    )


def build_completion_client(**kwargs: Any) -> CompletionClient:
    """Build a client on the configured provider's chat model."""
    return CompletionClient(get_chat_model(agent=AGENT_NAME, **kwargs))
