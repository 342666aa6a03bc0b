"""
Result aggregation.
"""

import logging

from threadline.core.models import AggregateReport, ReportMetadata
from threadline.engine.models import OutcomeKind, TaskOutcome
from threadline.rules.models import Rule

logger = logging.getLogger(__name__)


def aggregate(outcomes: list[TaskOutcome], rules: list[Rule]) -> AggregateReport:
    """
    Classify outcomes, count them, and keep only actionable results.

    Metadata always carries the pre-filter counts so that "no rule applied"
    and "every rule was compliant" stay distinguishable. ``results`` drops
    every not_relevant entry, including skips, timeouts and soft failures.
    """
    if len(outcomes) != len(rules):
        raise ValueError(f"Expected one outcome per rule ({len(rules)}), got {len(outcomes)}")

    counts = dict.fromkeys(OutcomeKind, 0)
    for outcome in outcomes:
        counts[outcome.kind] += 1

    metadata = ReportMetadata(
        total_experts=len(rules),
        completed=counts[OutcomeKind.COMPLETED],
        timed_out=counts[OutcomeKind.TIMED_OUT],
        errors=counts[OutcomeKind.ERRORED],
        skipped=counts[OutcomeKind.SKIPPED],
    )

    results = [outcome.result for outcome in outcomes if outcome.result.is_visible]

    logger.info(
        f"📊 Aggregated {metadata.total_experts} rules: {metadata.completed} completed, "
        f"{metadata.timed_out} timed out, {metadata.errors} errors, {metadata.skipped} skipped; "
        f"{len(results)} reported"
    )
    return AggregateReport(results=results, metadata=metadata)
