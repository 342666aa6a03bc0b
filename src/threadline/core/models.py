from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EnvironmentKind(str, Enum):
    """Diff strategies, one per environment state."""

    PR = "pr"
    MERGE_TO_MAIN = "mergeToMain"
    BRANCH_PUSH = "branchPush"
    LOCAL = "local"


class EvaluationStatus(str, Enum):
    """Verdict of one rule against one change."""

    COMPLIANT = "compliant"
    ATTENTION = "attention"
    NOT_RELEVANT = "not_relevant"

    @classmethod
    def parse(cls, value: object) -> "EvaluationStatus":
        """Map arbitrary backend output to a status; anything unknown is not_relevant."""
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.NOT_RELEVANT


class WireModel(BaseModel):
    """Base for models exchanged as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class DiffContext(WireModel):
    """The resolved diff and changed files for one check."""

    diff_text: str = ""
    changed_files: list[str] = Field(default_factory=list)
    environment: EnvironmentKind = EnvironmentKind.LOCAL

    @property
    def is_empty(self) -> bool:
        return not self.changed_files


class EvaluationResult(WireModel):
    """One rule's verdict."""

    rule_id: str
    status: EvaluationStatus = EvaluationStatus.NOT_RELEVANT
    reasoning: str | None = None
    line_references: list[int] | None = None
    file_references: list[str] | None = None

    @property
    def is_visible(self) -> bool:
        """Whether the result survives report filtering."""
        return self.status != EvaluationStatus.NOT_RELEVANT


class ReportMetadata(WireModel):
    """Pre-filter counts for a check."""

    total_experts: int = 0
    completed: int = 0
    timed_out: int = 0
    errors: int = 0
    skipped: int = Field(default=0, description="Rules whose patterns matched no changed file")


class AggregateReport(WireModel):
    """Filtered results of a check plus its summary counts."""

    results: list[EvaluationResult] = Field(default_factory=list)
    metadata: ReportMetadata = Field(default_factory=ReportMetadata)

    @property
    def has_attention(self) -> bool:
        return any(result.status == EvaluationStatus.ATTENTION for result in self.results)

    @property
    def exit_code(self) -> int:
        """Process exit code for a CLI caller: 1 when any rule needs attention."""
        return 1 if self.has_attention else 0
