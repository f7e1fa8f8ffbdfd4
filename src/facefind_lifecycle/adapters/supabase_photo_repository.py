"""Supabase-backed photo metadata repository."""

from collections.abc import Sequence
from dataclasses import dataclass

from supabase import Client

from facefind_lifecycle.adapters.supabase_pages import fetch_all
from facefind_lifecycle.domain.models import PhotoRecord
from facefind_lifecycle.services.retention import PhotoRepository


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for photo metadata."""

    client: Client
    table: str = "photos"

    def list_by_event(self, event_id: str) -> list[PhotoRecord]:
        """Return every photo row for an event."""
        rows = fetch_all(
            lambda: self.client.table(self.table)
            .select("id, event_id, s3_key")
            .eq("event_id", event_id)
            .order("id")
        )
        return [
            PhotoRecord(
                id=str(row["id"]),
                event_id=str(row["event_id"]),
                s3_key=row.get("s3_key"),
            )
            for row in rows
        ]

    def delete_batch(self, ids: Sequence[str]) -> None:
        """Delete photo rows by id in one request."""
        self.client.table(self.table).delete().in_("id", list(ids)).execute()
