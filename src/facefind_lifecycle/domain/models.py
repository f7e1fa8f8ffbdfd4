"""Domain models for records purged by the lifecycle jobs."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SessionRecord:
    """Represents one attendee face-scan session."""

    id: str
    event_id: str
    expires_at: datetime | None = None


@dataclass(frozen=True)
class PhotoRecord:
    """Represents photo metadata stored for an event."""

    id: str
    event_id: str
    s3_key: str | None = None


@dataclass(frozen=True)
class OrganizerRecord:
    """Represents the organizer contact details used for notifications."""

    id: str
    email: str | None
    first_name: str | None = None
