"""Retention expiry: purge photos, blobs and face data, then archive."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from facefind_lifecycle.domain.events import (
    RETENTION_SOURCE_STATUSES,
    EventRecord,
    EventStatus,
    is_retention_over,
)
from facefind_lifecycle.domain.models import PhotoRecord
from facefind_lifecycle.domain.reports import RunReport
from facefind_lifecycle.services.batching import (
    BLOB_BATCH_LIMIT,
    RECORD_BATCH_LIMIT,
    delete_all,
)
from facefind_lifecycle.services.face_collections import CollectionRetirer
from facefind_lifecycle.services.lifecycle import (
    EventRepository,
    advance_status,
    reload_if_eligible,
    run_sequentially,
)
from facefind_lifecycle.services.notifications import OrganizerNotifier

logger = logging.getLogger(__name__)

BLOB_FOLDERS = ("originals", "processed", "thumbnails")


class BlobStore(Protocol):
    """Object storage holding the photo files."""

    def list_keys(self, prefix: str) -> list[str]:
        """Return every key under ``prefix``."""

    def delete_batch(self, ids: Sequence[str]) -> None:
        """Delete a batch of keys."""


class PhotoRepository(Protocol):
    """Persistence interface for photo metadata."""

    def list_by_event(self, event_id: str) -> list[PhotoRecord]:
        """Return every photo row for an event."""

    def delete_batch(self, ids: Sequence[str]) -> None:
        """Delete a batch of photo rows by id."""


def blob_prefix(folder: str, event_id: str) -> str:
    """Return the key prefix holding an event's files in ``folder``."""
    return f"{folder}/{event_id}/"


@dataclass
class RetentionTransitioner:
    """Archives events whose retention period has ended."""

    events: EventRepository
    photos: PhotoRepository
    blobs: BlobStore
    retirer: CollectionRetirer
    notifier: OrganizerNotifier
    photo_batch_size: int = RECORD_BATCH_LIMIT
    blob_batch_size: int = BLOB_BATCH_LIMIT
    name: str = "retention"

    async def run(self, now: datetime) -> RunReport:
        """Check all download-period events and archive the expired ones."""
        return await run_sequentially(self.name, now, self._scan, self._process)

    def _scan(self) -> list[EventRecord]:
        return self.events.list_by_status(RETENTION_SOURCE_STATUSES)

    async def _process(
        self, event: EventRecord, now: datetime, report: RunReport
    ) -> bool:
        if not is_retention_over(event, now):
            return False
        current = reload_if_eligible(
            self.events, event.id, RETENTION_SOURCE_STATUSES
        )
        if current is None:
            return False
        logger.info(
            "Retention period ended for event %s (%s)", current.id, current.name
        )

        self._delete_blobs(current.id, report)
        self._delete_photo_metadata(current.id)
        if not self.retirer.retire(current.collection_id):
            report.warnings.append(
                f"{current.id}: failed to delete face collection "
                f"{current.collection_id}"
            )

        updated = advance_status(
            self.events,
            current.id,
            EventStatus.ARCHIVED,
            now,
            expected=RETENTION_SOURCE_STATUSES,
        )
        if not updated:
            logger.info(
                "Event %s changed status concurrently, skipping", current.id
            )
            return False
        logger.info("Event %s archived successfully", current.id)

        if not await self.notifier.event_archived(current):
            report.warnings.append(f"{current.id}: organizer notification failed")
        return True

    def _delete_blobs(self, event_id: str, report: RunReport) -> None:
        for folder in BLOB_FOLDERS:
            prefix = blob_prefix(folder, event_id)
            try:
                keys = self.blobs.list_keys(prefix)
                if not keys:
                    continue
                deleted = delete_all(self.blobs, keys, self.blob_batch_size)
            except Exception:
                logger.exception(
                    "Error deleting blobs", extra={"prefix": prefix}
                )
                report.warnings.append(
                    f"{event_id}: failed to delete blobs under {prefix}"
                )
                continue
            logger.info("Deleted %d objects from %s", deleted, prefix)

    def _delete_photo_metadata(self, event_id: str) -> None:
        photos = self.photos.list_by_event(event_id)
        if not photos:
            return
        deleted = delete_all(
            self.photos, [photo.id for photo in photos], self.photo_batch_size
        )
        logger.info("Deleted %d photo records for event %s", deleted, event_id)
