"""Face collection retirement."""

import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


class CollectionNotFoundError(LookupError):
    """Raised when a face collection does not exist."""


class FaceCollectionClient(Protocol):
    """Interface for the face-index service."""

    def delete_collection(self, collection_id: str) -> None:
        """Delete a collection, raising CollectionNotFoundError if absent."""


@dataclass
class CollectionRetirer:
    """Deletes face collections without ever failing the caller."""

    client: FaceCollectionClient

    def retire(self, collection_id: str | None) -> bool:
        """Delete a collection; return False when a failure was swallowed."""
        if not collection_id:
            logger.info("No face collection to retire")
            return True
        try:
            self.client.delete_collection(collection_id)
        except CollectionNotFoundError:
            logger.info(
                "Face collection already absent",
                extra={"collection_id": collection_id},
            )
            return True
        except Exception:
            logger.exception(
                "Failed to delete face collection",
                extra={"collection_id": collection_id},
            )
            return False
        logger.info("Face collection deleted", extra={"collection_id": collection_id})
        return True
