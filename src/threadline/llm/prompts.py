"""
Prompts for rule evaluation.
"""

from threadline.rules.models import Rule


def get_evaluation_system_prompt() -> str:
    """System prompt for rule evaluation."""
    return "You are a code reviewer checking one rule. Return only a valid JSON object, no other text."


def _render_context_files(context_content: dict[str, str]) -> str:
    if not context_content:
        return ""

    blocks = "".join(f"\n--- {path} ---\n{content}\n" for path, content in context_content.items())
    return f"Context Files:\n{blocks}\n"


def create_evaluation_prompt(rule: Rule, diff_text: str, matched_files: list[str]) -> str:
    """Create the prompt that asks the backend for one rule's verdict."""

    files_text = "\n".join(matched_files)

    return f"""You are checking code changes against exactly one rule: {rule.id}

Only report violations of THIS rule. Ignore style problems, other quality issues, and
concerns the rule does not mention. If this rule is not violated, answer "compliant"
even when other issues exist.

Rule Guidelines:
{rule.content}

{_render_context_files(rule.context_content)}Code Changes (git diff):
{diff_text}

Changed Files:
{files_text}

Reading the diff:
- Lines starting with "+" are additions.
- Lines starting with "-" are deletions. Deleting a violating line is a fix, not a violation.
- Lines without a prefix are unchanged context.

Judge the FINAL state of the code, after the changes are applied:
1. Flag only violations that still exist once the change is applied.
2. If the change removes a violation, answer "compliant".
3. Answer "attention" only for a direct violation of this rule in the final code.

Return JSON only, with this exact structure:
{{
  "status": "compliant" | "attention" | "not_relevant",
  "reasoning": "brief explanation",
  "line_references": [line numbers if attention is needed]
}}

Status meanings:
- "compliant": the changes follow this rule.
- "attention": the changes directly violate this rule.
- "not_relevant": this rule does not apply to these files or changes.
"""
