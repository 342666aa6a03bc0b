from threadline.llm.prompts import create_evaluation_prompt, get_evaluation_system_prompt
from threadline.rules.models import Rule


def make_rule(**kwargs) -> Rule:
    defaults = {"id": "sql-safety", "patterns": ["**/*.sql"], "content": "Queries must be parameterised."}
    return Rule(**{**defaults, **kwargs})


def test_prompt_carries_rule_diff_and_files() -> None:
    prompt = create_evaluation_prompt(make_rule(), "+SELECT * FROM t WHERE id = ' + id", ["db/q.sql", "db/r.sql"])

    assert "exactly one rule: sql-safety" in prompt
    assert "Queries must be parameterised." in prompt
    assert "+SELECT * FROM t WHERE id = ' + id" in prompt
    assert "db/q.sql\ndb/r.sql" in prompt


def test_prompt_describes_the_response_contract() -> None:
    prompt = create_evaluation_prompt(make_rule(), "", ["db/q.sql"])

    assert '"status": "compliant" | "attention" | "not_relevant"' in prompt
    assert '"line_references"' in prompt
    assert "FINAL state" in prompt


def test_context_files_are_rendered() -> None:
    rule = make_rule(context_content={"docs/db.md": "Use the query builder."})

    prompt = create_evaluation_prompt(rule, "", ["db/q.sql"])

    assert "Context Files:" in prompt
    assert "--- docs/db.md ---\nUse the query builder." in prompt


def test_no_context_section_without_context_files() -> None:
    assert "Context Files:" not in create_evaluation_prompt(make_rule(), "", ["db/q.sql"])


def test_system_prompt_asks_for_json() -> None:
    assert "JSON" in get_evaluation_system_prompt()
