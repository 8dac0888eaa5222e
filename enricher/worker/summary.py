from dataclasses import dataclass, field

from enricher.logging.logger import Log
from enricher.pipeline.models import OutcomeStatus, RunOutcome


@dataclass
class RunSummary:
    """Per-document outcomes of one run plus aggregate counts."""

    outcomes: list[RunOutcome] = field(default_factory=list)

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def success(self) -> int:
        return self.count(OutcomeStatus.SUCCESS)

    @property
    def failed(self) -> int:
        return self.count(OutcomeStatus.FAILED)

    @property
    def skipped(self) -> int:
        return self.count(OutcomeStatus.SKIPPED)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    def counts(self) -> dict[str, int]:
        return {
            "success": self.success,
            "failed": self.failed,
            "skipped": self.skipped,
            "total": self.total,
        }

    def failures(self) -> list[RunOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.FAILED]


def log_summary(summary: RunSummary, heading: str = "PROCESSING SUMMARY") -> None:
    """Write the run summary to the log, failed items last."""
    Log.info("=" * 60)
    Log.info(heading)
    Log.info("=" * 60)
    for outcome in summary.outcomes:
        Log.info(f"[{outcome.status.value}] {outcome.title}: {outcome.message}")
    Log.info(
        f"Successful: {summary.success} | Failed: {summary.failed} | "
        f"Skipped: {summary.skipped} | Total: {summary.total}"
    )
    failures = summary.failures()
    if failures:
        Log.warning("Failed items:")
        for outcome in failures:
            Log.warning(f"  - {outcome.title}: {outcome.message} ({outcome.reason.value})")
