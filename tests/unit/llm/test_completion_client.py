from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from threadline.core.errors import MalformedResponseError, NoResponseError
from threadline.core.models import EvaluationStatus
from threadline.engine.models import EvaluationTask
from threadline.llm.client import CompletionClient, build_completion_client, build_result, parse_response_content
from threadline.rules.models import Rule

DIFF = "diff --git a/db/q.sql b/db/q.sql\n+SELECT 1;\n"


@pytest.fixture
def task() -> EvaluationTask:
    rule = Rule(id="sql-safety", patterns=["**/*.sql"], content="Parameterise queries.")
    return EvaluationTask(rule=rule, matched_files=["db/q.sql", "db/other.sql"])


def client_returning(content) -> tuple[CompletionClient, AsyncMock]:
    llm = AsyncMock()
    llm.ainvoke.return_value = AIMessage(content=content)
    return CompletionClient(llm), llm


@pytest.mark.asyncio
async def test_evaluate_parses_verdict(task) -> None:
    client, llm = client_returning('{"status": "attention", "reasoning": "String concat", "line_references": [3]}')

    result = await client.evaluate(task, "prompt text", DIFF)

    assert result.rule_id == "sql-safety"
    assert result.status == EvaluationStatus.ATTENTION
    assert result.reasoning == "String concat"
    assert result.line_references == [3]
    assert result.file_references == ["db/q.sql"]

    messages = llm.ainvoke.call_args.args[0]
    assert isinstance(messages[0], SystemMessage)
    assert isinstance(messages[1], HumanMessage)
    assert messages[1].content == "prompt text"


@pytest.mark.asyncio
async def test_empty_response_raises(task) -> None:
    client, _ = client_returning("   ")
    with pytest.raises(NoResponseError, match="sql-safety"):
        await client.evaluate(task, "prompt")


@pytest.mark.asyncio
async def test_non_json_response_raises(task) -> None:
    client, _ = client_returning("Looks fine to me!")
    with pytest.raises(MalformedResponseError) as exc_info:
        await client.evaluate(task, "prompt")
    assert exc_info.value.content == "Looks fine to me!"


@pytest.mark.asyncio
async def test_content_blocks_are_joined(task) -> None:
    client, _ = client_returning([{"type": "text", "text": '{"status": '}, {"type": "text", "text": '"compliant"}'}])

    result = await client.evaluate(task, "prompt")

    assert result.status == EvaluationStatus.COMPLIANT


@pytest.mark.asyncio
async def test_backend_exceptions_propagate(task) -> None:
    llm = AsyncMock()
    llm.ainvoke.side_effect = ConnectionError("connection reset")

    with pytest.raises(ConnectionError):
        await CompletionClient(llm).evaluate(task, "prompt")


def test_parse_rejects_non_object() -> None:
    with pytest.raises(MalformedResponseError, match="expected a JSON object"):
        parse_response_content('["attention"]')


class TestBuildResult:
    @pytest.mark.parametrize("parsed", [{}, {"status": "violation"}, {"status": 3}, {"status": None}])
    def test_bad_status_degrades_to_not_relevant(self, task, parsed) -> None:
        assert build_result(task, parsed).status == EvaluationStatus.NOT_RELEVANT

    def test_non_string_reasoning_is_dropped(self, task) -> None:
        assert build_result(task, {"status": "compliant", "reasoning": {"a": 1}}).reasoning is None

    def test_line_references_are_coerced(self, task) -> None:
        result = build_result(task, {"status": "attention", "line_references": [1, "7", "x", True, None]})
        assert result.line_references == [1, 7]

    def test_line_references_must_be_a_list(self, task) -> None:
        assert build_result(task, {"status": "attention", "line_references": "12"}).line_references is None

    def test_file_references_default_to_matched_files(self, task) -> None:
        result = build_result(task, {"status": "compliant"}, DIFF)
        assert result.file_references == ["db/q.sql", "db/other.sql"]

    def test_empty_line_references_still_narrow_file_references(self, task) -> None:
        result = build_result(task, {"status": "compliant", "line_references": []}, DIFF)
        assert result.line_references == []
        assert result.file_references == ["db/q.sql"]

    def test_file_references_fall_back_when_no_file_is_in_diff(self, task) -> None:
        result = build_result(task, {"status": "attention", "line_references": [1]}, "unrelated diff")
        assert result.file_references == ["db/q.sql", "db/other.sql"]


@patch("threadline.llm.client.get_chat_model")
def test_build_completion_client_uses_check_agent(mock_get_chat_model) -> None:
    mock_get_chat_model.return_value = MagicMock()

    client = build_completion_client()

    mock_get_chat_model.assert_called_once_with(agent="check_agent")
    assert client.llm is mock_get_chat_model.return_value
