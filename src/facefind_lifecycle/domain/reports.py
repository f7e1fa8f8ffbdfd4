"""Run reports produced by lifecycle jobs."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class EventFailure:
    """An event whose transition failed during a run."""

    event_id: str
    error: str


@dataclass
class RunReport:
    """Summary of a single lifecycle job invocation."""

    job: str
    started_at: datetime
    scanned: int = 0
    transitioned: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[EventFailure] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.transitioned) + len(self.skipped) + len(self.failed)

    def as_dict(self) -> dict[str, object]:
        """Render the report as a JSON-compatible dict."""
        return {
            "job": self.job,
            "started_at": self.started_at.isoformat(),
            "scanned": self.scanned,
            "processed": self.processed,
            "transitioned": list(self.transitioned),
            "skipped": list(self.skipped),
            "failed": [
                {"event_id": failure.event_id, "error": failure.error}
                for failure in self.failed
            ],
            "warnings": list(self.warnings),
        }
