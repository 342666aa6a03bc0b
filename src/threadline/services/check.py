"""
Check orchestration.

Everything above the dispatch boundary (request validation, configuration,
diff resolution, rule loading) aborts the check when it fails; everything
below it is contained per rule by the dispatcher.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from threadline.core.config import config
from threadline.core.models import AggregateReport, DiffContext, EnvironmentKind
from threadline.core.utils.logging import log_operation
from threadline.engine.aggregator import aggregate
from threadline.engine.dispatcher import dispatch
from threadline.git.client import GitClient
from threadline.git.environment import Environment, detect_environment
from threadline.git.resolver import DiffResolver
from threadline.llm.client import CompletionClient, build_completion_client
from threadline.rules.interface import RuleLoader
from threadline.rules.loader import FileSystemRuleLoader, load_context_content
from threadline.rules.models import Rule


class CheckRequest(BaseModel):
    """A check invocation as sent by a CLI or CI caller."""

    model_config = ConfigDict(populate_by_name=True)

    rules: list[Rule] = Field(min_length=1, validation_alias=AliasChoices("rules", "threadlines"))
    diff: str
    files: list[str]

    def to_diff_context(self, environment: EnvironmentKind = EnvironmentKind.LOCAL) -> DiffContext:
        return DiffContext(diff_text=self.diff, changed_files=self.files, environment=environment)


async def run_check(
    rules: list[Rule],
    diff: DiffContext,
    client: CompletionClient,
    timeout: float | None = None,
) -> AggregateReport:
    """Dispatch every rule against the diff and aggregate the outcomes."""
    async with log_operation(
        "threadline_check",
        subject_ids={"environment": diff.environment.value},
        rule_count=len(rules),
        file_count=len(diff.changed_files),
    ):
        outcomes = await dispatch(rules, diff, client, timeout=timeout)
        return aggregate(outcomes, rules)


async def check_repository(
    repo_root: Path | str,
    environment: Environment | None = None,
    client: CompletionClient | None = None,
    loader: RuleLoader | None = None,
    timeout: float | None = None,
) -> AggregateReport:
    """
    Run a full check on a local checkout.

    Args:
        repo_root: Repository root
        environment: CI signals; detected from the process environment when omitted
        client: Completion client; built from configuration when omitted
        loader: Rule source; the filesystem loader when omitted
        timeout: Per-rule deadline in seconds

    Raises:
        ConfigurationError: Completion credentials are missing (checked before anything else)
        DiffResolutionError: The change could not be determined
        RuleLoadError: No usable rule source
    """
    repo_root = Path(repo_root)

    if client is None:
        config.validate()
        client = build_completion_client()

    resolver = DiffResolver(
        GitClient(repo_root),
        environment or detect_environment(),
        trunk=config.check.trunk_branch,
        remote=config.check.git_remote,
        context_lines=config.check.diff_context_lines,
    )
    diff = resolver.resolve()

    rules = await (loader or FileSystemRuleLoader()).get_rules(repo_root)
    rules = [load_context_content(rule, repo_root) for rule in rules]

    return await run_check(rules, diff, client, timeout=timeout)
