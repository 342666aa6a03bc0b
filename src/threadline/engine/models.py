"""
Data models for rule dispatch.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from threadline.core.models import EvaluationResult, EvaluationStatus
from threadline.rules.models import Rule

NO_MATCH_REASONING = "No files match rule patterns"


class EvaluationTask(BaseModel):
    """One rule scheduled against the files it matched."""

    model_config = ConfigDict(frozen=True)

    rule: Rule
    matched_files: list[str] = Field(min_length=1)


class OutcomeKind(str, Enum):
    """How a rule's slot was filled."""

    COMPLETED = "completed"  # the backend answered
    TIMED_OUT = "timed_out"  # the deadline passed first
    ERRORED = "errored"  # the task was rejected
    SKIPPED = "skipped"  # no changed file matched, nothing was scheduled


class TaskOutcome(BaseModel):
    """The result slot for one rule."""

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    result: EvaluationResult
    error: str | None = None

    @classmethod
    def completed(cls, result: EvaluationResult) -> "TaskOutcome":
        return cls(kind=OutcomeKind.COMPLETED, result=result)

    @classmethod
    def skipped(cls, rule: Rule) -> "TaskOutcome":
        return cls(
            kind=OutcomeKind.SKIPPED,
            result=EvaluationResult(
                rule_id=rule.id, status=EvaluationStatus.NOT_RELEVANT, reasoning=NO_MATCH_REASONING
            ),
        )

    @classmethod
    def timed_out(cls, rule: Rule, timeout: float) -> "TaskOutcome":
        return cls(
            kind=OutcomeKind.TIMED_OUT,
            result=EvaluationResult(
                rule_id=rule.id,
                status=EvaluationStatus.NOT_RELEVANT,
                reasoning=f"Request timed out after {timeout:g}s",
            ),
        )

    @classmethod
    def errored(cls, rule: Rule, error: BaseException) -> "TaskOutcome":
        message = str(error) or type(error).__name__
        return cls(
            kind=OutcomeKind.ERRORED,
            result=EvaluationResult(
                rule_id=rule.id, status=EvaluationStatus.NOT_RELEVANT, reasoning=f"Error: {message}"
            ),
            error=message,
        )
