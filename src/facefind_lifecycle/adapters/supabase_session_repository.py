"""Supabase-backed attendee session repository."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from facefind_lifecycle.adapters.supabase_pages import fetch_all
from facefind_lifecycle.domain.events import parse_timestamp
from facefind_lifecycle.domain.models import SessionRecord
from facefind_lifecycle.services.grace_period import SessionRepository


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for attendee sessions."""

    client: Client
    table: str = "sessions"

    def list_by_event(self, event_id: str) -> list[SessionRecord]:
        """Return every session for an event."""
        rows = fetch_all(
            lambda: self.client.table(self.table)
            .select("id, event_id, expires_at")
            .eq("event_id", event_id)
            .order("id")
        )
        return [
            SessionRecord(
                id=str(row["id"]),
                event_id=str(row["event_id"]),
                expires_at=_parse_expiry(row.get("expires_at")),
            )
            for row in rows
        ]

    def delete_batch(self, ids: Sequence[str]) -> None:
        """Delete sessions by id in one request."""
        self.client.table(self.table).delete().in_("id", list(ids)).execute()


def _parse_expiry(raw: object) -> datetime | None:
    """Read an expiry stored as epoch seconds or as an ISO-8601 timestamp."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int | float):
        return datetime.fromtimestamp(raw, tz=UTC)
    if isinstance(raw, str) and raw.strip().isdigit():
        return datetime.fromtimestamp(int(raw), tz=UTC)
    try:
        return parse_timestamp(raw)
    except ValueError:
        return None
