"""Shared run loop and scheduler entry point for lifecycle jobs."""

import logging
from collections.abc import Awaitable, Callable, Collection
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from facefind_lifecycle.domain.events import EventRecord, EventStatus
from facefind_lifecycle.domain.reports import EventFailure, RunReport

logger = logging.getLogger(__name__)


class ScanFailedError(RuntimeError):
    """Raised when the candidate-event scan fails and the run must abort."""


class EventRepository(Protocol):
    """Persistence interface for event lifecycle fields."""

    def list_by_status(self, statuses: Collection[EventStatus]) -> list[EventRecord]:
        """Return all events whose status is one of ``statuses``."""

    def get_event(self, event_id: str) -> EventRecord | None:
        """Return the current state of an event, if present."""

    def update_status(
        self,
        event_id: str,
        status: EventStatus,
        updated_at: datetime,
        expected: Collection[EventStatus],
    ) -> bool:
        """Set the status while it is still one of ``expected``.

        Returns true when a row was updated.
        """


class LifecycleJob(Protocol):
    """A scheduled lifecycle transition job."""

    async def run(self, now: datetime) -> RunReport:
        """Run the job once for the given instant."""


ProcessEvent = Callable[[EventRecord, datetime, RunReport], Awaitable[bool]]


async def run_sequentially(
    job: str,
    now: datetime,
    scan: Callable[[], list[EventRecord]],
    process: ProcessEvent,
) -> RunReport:
    """Process scanned events one at a time, isolating per-event failures.

    ``process`` returns true when the event was transitioned and false when it
    was skipped. Any exception it raises is logged and recorded, and the loop
    moves on to the next event.
    """
    report = RunReport(job=job, started_at=now)
    try:
        events = scan()
    except Exception as exc:
        raise ScanFailedError(f"{job}: failed to scan candidate events") from exc

    report.scanned = len(events)
    if not events:
        logger.info("No candidate events found", extra={"job": job})
        return report
    logger.info("Found %d events to check", len(events), extra={"job": job})

    for event in events:
        try:
            transitioned = await process(event, now, report)
        except Exception as exc:
            logger.exception(
                "Failed to process event", extra={"job": job, "event_id": event.id}
            )
            report.failed.append(
                EventFailure(event_id=event.id, error=f"{type(exc).__name__}: {exc}")
            )
            continue
        if transitioned:
            report.transitioned.append(event.id)
        else:
            report.skipped.append(event.id)
    return report


def reload_if_eligible(
    events: EventRepository, event_id: str, sources: Collection[EventStatus]
) -> EventRecord | None:
    """Re-read an event and return it only while it is still in ``sources``."""
    current = events.get_event(event_id)
    if current is None or current.status not in sources:
        logger.info(
            "Event no longer eligible, skipping",
            extra={
                "event_id": event_id,
                "status": current.status.value if current else None,
            },
        )
        return None
    return current


def advance_status(
    events: EventRepository,
    event_id: str,
    target: EventStatus,
    now: datetime,
    expected: Collection[EventStatus],
) -> bool:
    """Move an event forward to ``target`` while it is still in ``expected``.

    Raises ValueError if any expected status does not precede ``target``.
    """
    backward = sorted(s.value for s in expected if not s.precedes(target))
    if backward:
        raise ValueError(
            f"Refusing to move event {event_id} from {backward} back to "
            f"{target.value}"
        )
    return events.update_status(event_id, target, updated_at=now, expected=expected)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class LifecycleRunner:
    """Entry point the external scheduler invokes once per job per day."""

    jobs: dict[str, LifecycleJob]
    clock: Callable[[], datetime] = field(default=_utc_now)

    async def run(self, job_name: str) -> RunReport:
        """Run a named job at the current instant and return its report."""
        job = self.jobs[job_name]
        now = self.clock()
        logger.info("Starting %s cleanup", job_name)
        try:
            report = await job.run(now)
        except ScanFailedError:
            logger.exception("%s cleanup aborted", job_name)
            raise
        logger.info(
            "%s cleanup completed: %d scanned, %d transitioned, %d failed",
            job_name,
            report.scanned,
            len(report.transitioned),
            len(report.failed),
        )
        return report
