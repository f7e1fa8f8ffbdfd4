"""Rekognition-backed face collection client."""

from dataclasses import dataclass
from typing import Any

import boto3
from botocore.exceptions import ClientError

from facefind_lifecycle.services.face_collections import (
    CollectionNotFoundError,
    FaceCollectionClient,
)


@dataclass
class RekognitionCollectionClient(FaceCollectionClient):
    """Deletes Rekognition face collections."""

    client: Any

    @classmethod
    def create(cls, region: str) -> "RekognitionCollectionClient":
        """Create a client with a default boto3 Rekognition client."""
        return cls(client=boto3.client("rekognition", region_name=region))

    def delete_collection(self, collection_id: str) -> None:
        """Delete a collection, mapping a missing one to CollectionNotFoundError."""
        try:
            self.client.delete_collection(CollectionId=collection_id)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code == "ResourceNotFoundException":
                raise CollectionNotFoundError(collection_id) from exc
            raise
