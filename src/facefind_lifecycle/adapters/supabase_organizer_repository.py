"""Supabase-backed organizer lookup."""

from dataclasses import dataclass

from supabase import Client

from facefind_lifecycle.domain.models import OrganizerRecord
from facefind_lifecycle.services.notifications import OrganizerRepository


@dataclass
class SupabaseOrganizerRepository(OrganizerRepository):
    """Supabase implementation for organizer contact details."""

    client: Client
    table: str = "users"

    def get_organizer(self, organizer_id: str) -> OrganizerRecord | None:
        """Return the organizer's contact details, if present."""
        response = (
            self.client.table(self.table)
            .select("id, email, first_name")
            .eq("id", organizer_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return OrganizerRecord(
            id=str(row["id"]),
            email=row.get("email"),
            first_name=row.get("first_name"),
        )
