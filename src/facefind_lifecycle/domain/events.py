"""Domain models and deadline rules for event lifecycles."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum


class EventStatus(str, Enum):
    """Forward-only lifecycle states of an event."""

    CREATED = "CREATED"
    PAID = "PAID"
    ACTIVE = "ACTIVE"
    GRACE_PERIOD = "GRACE_PERIOD"
    DOWNLOAD_PERIOD = "DOWNLOAD_PERIOD"
    ARCHIVED = "ARCHIVED"

    def precedes(self, other: "EventStatus") -> bool:
        """Return true when this status comes strictly before ``other``."""
        return _LIFECYCLE_ORDER.index(self) < _LIFECYCLE_ORDER.index(other)


_LIFECYCLE_ORDER = tuple(EventStatus)

GRACE_SOURCE_STATUSES = frozenset({EventStatus.ACTIVE, EventStatus.GRACE_PERIOD})
RETENTION_SOURCE_STATUSES = frozenset({EventStatus.DOWNLOAD_PERIOD})


@dataclass(frozen=True)
class EventRecord:
    """Represents the lifecycle-relevant fields of a stored event."""

    id: str
    name: str
    start_at: datetime
    end_at: datetime
    grace_period_days: int
    retention_period_days: int
    status: EventStatus
    organizer_id: str | None
    collection_id: str | None


def grace_period_end(event: EventRecord) -> datetime:
    """Return the instant the event's grace period ends."""
    return _as_utc(event.end_at) + timedelta(days=event.grace_period_days)


def retention_end(event: EventRecord) -> datetime:
    """Return the instant the event's retention period ends."""
    return _as_utc(event.end_at) + timedelta(
        days=event.grace_period_days + event.retention_period_days
    )


def is_grace_period_over(event: EventRecord, now: datetime) -> bool:
    """Return true once ``now`` is strictly past the grace period end."""
    return _as_utc(now) > grace_period_end(event)


def is_retention_over(event: EventRecord, now: datetime) -> bool:
    """Return true once ``now`` is strictly past the retention end."""
    return _as_utc(now) > retention_end(event)


def parse_timestamp(raw: object) -> datetime:
    """Parse an ISO-8601 timestamp from storage into an aware UTC datetime."""
    if not isinstance(raw, str):
        raise ValueError(f"Expected an ISO-8601 string, got {raw!r}")
    value = raw.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return _as_utc(datetime.fromisoformat(value))


def _as_utc(value: datetime) -> datetime:
    # Naive values from storage are UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
