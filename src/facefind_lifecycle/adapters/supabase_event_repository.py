"""Supabase-backed event repository."""

import logging
from collections.abc import Collection
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from supabase import Client

from facefind_lifecycle.adapters.supabase_pages import fetch_all
from facefind_lifecycle.domain.events import EventRecord, EventStatus, parse_timestamp
from facefind_lifecycle.services.lifecycle import EventRepository

logger = logging.getLogger(__name__)

_COLUMNS = (
    "id, event_name, organizer_id, start_date_time, end_date_time, "
    "grace_period_days, retention_period_days, status, rekognition_collection_id"
)


@dataclass
class SupabaseEventRepository(EventRepository):
    """Supabase implementation for event lifecycle fields."""

    client: Client
    table: str = "events"

    def list_by_status(self, statuses: Collection[EventStatus]) -> list[EventRecord]:
        """Return all events in any of the given statuses."""
        values = sorted(status.value for status in statuses)
        rows = fetch_all(
            lambda: self.client.table(self.table)
            .select(_COLUMNS)
            .in_("status", values)
            .order("id")
        )
        events: list[EventRecord] = []
        for row in rows:
            try:
                events.append(_to_event(row))
            except RuntimeError:
                # Malformed rows are skipped; the rest of the scan proceeds.
                logger.warning(
                    "Skipping malformed event row",
                    extra={"event_id": row.get("id")},
                    exc_info=True,
                )
        return events

    def get_event(self, event_id: str) -> EventRecord | None:
        """Return an event by id, if present."""
        response = (
            self.client.table(self.table)
            .select(_COLUMNS)
            .eq("id", event_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_event(response.data[0])

    def update_status(
        self,
        event_id: str,
        status: EventStatus,
        updated_at: datetime,
        expected: Collection[EventStatus],
    ) -> bool:
        """Update the status only while the row is still in ``expected``."""
        response = (
            self.client.table(self.table)
            .update({"status": status.value, "updated_at": updated_at.isoformat()})
            .eq("id", event_id)
            .in_("status", sorted(value.value for value in expected))
            .execute()
        )
        return bool(response.data)


def _to_event(row: dict[str, Any]) -> EventRecord:
    try:
        return EventRecord(
            id=str(row["id"]),
            name=row.get("event_name") or "",
            start_at=parse_timestamp(row["start_date_time"]),
            end_at=parse_timestamp(row["end_date_time"]),
            grace_period_days=int(row.get("grace_period_days") or 0),
            retention_period_days=int(row.get("retention_period_days") or 0),
            status=EventStatus(row["status"]),
            organizer_id=row.get("organizer_id"),
            collection_id=row.get("rekognition_collection_id"),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise RuntimeError(f"Malformed event row {row.get('id')!r}") from exc
