"""Grace period expiry: purge attendee sessions and open the download period."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from facefind_lifecycle.domain.events import (
    GRACE_SOURCE_STATUSES,
    EventRecord,
    EventStatus,
    is_grace_period_over,
)
from facefind_lifecycle.domain.models import SessionRecord
from facefind_lifecycle.domain.reports import RunReport
from facefind_lifecycle.services.batching import RECORD_BATCH_LIMIT, delete_all
from facefind_lifecycle.services.lifecycle import (
    EventRepository,
    advance_status,
    reload_if_eligible,
    run_sequentially,
)
from facefind_lifecycle.services.notifications import OrganizerNotifier

logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    """Persistence interface for attendee sessions."""

    def list_by_event(self, event_id: str) -> list[SessionRecord]:
        """Return every session for an event."""

    def delete_batch(self, ids: Sequence[str]) -> None:
        """Delete a batch of sessions by id."""


@dataclass
class GracePeriodTransitioner:
    """Moves events whose grace period has ended to DOWNLOAD_PERIOD."""

    events: EventRepository
    sessions: SessionRepository
    notifier: OrganizerNotifier
    session_batch_size: int = RECORD_BATCH_LIMIT
    name: str = "grace-period"

    async def run(self, now: datetime) -> RunReport:
        """Check all active events and transition the expired ones."""
        return await run_sequentially(self.name, now, self._scan, self._process)

    def _scan(self) -> list[EventRecord]:
        return self.events.list_by_status(GRACE_SOURCE_STATUSES)

    async def _process(
        self, event: EventRecord, now: datetime, report: RunReport
    ) -> bool:
        if not is_grace_period_over(event, now):
            return False
        current = reload_if_eligible(self.events, event.id, GRACE_SOURCE_STATUSES)
        if current is None:
            return False
        logger.info(
            "Grace period ended for event %s (%s)", current.id, current.name
        )

        sessions = self.sessions.list_by_event(current.id)
        if sessions:
            deleted = delete_all(
                self.sessions,
                [session.id for session in sessions],
                self.session_batch_size,
            )
            logger.info("Deleted %d sessions for event %s", deleted, current.id)

        updated = advance_status(
            self.events,
            current.id,
            EventStatus.DOWNLOAD_PERIOD,
            now,
            expected=GRACE_SOURCE_STATUSES,
        )
        if not updated:
            logger.info(
                "Event %s changed status concurrently, skipping", current.id
            )
            return False
        logger.info("Updated event %s to DOWNLOAD_PERIOD status", current.id)

        if not await self.notifier.grace_period_ended(current):
            report.warnings.append(f"{current.id}: organizer notification failed")
        return True
