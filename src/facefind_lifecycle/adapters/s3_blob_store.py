"""S3-backed blob store for event photo files."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import boto3

from facefind_lifecycle.services.retention import BlobStore


@dataclass
class S3BlobStore(BlobStore):
    """Lists and deletes photo objects in a single S3 bucket."""

    client: Any
    bucket: str

    @classmethod
    def create(cls, bucket: str, region: str) -> "S3BlobStore":
        """Create a blob store with a default boto3 S3 client."""
        return cls(client=boto3.client("s3", region_name=region), bucket=bucket)

    def list_keys(self, prefix: str) -> list[str]:
        """Return every object key under ``prefix``."""
        paginator = self.client.get_paginator("list_objects_v2")
        keys: list[str] = []
        for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
            keys.extend(item["Key"] for item in page.get("Contents") or [])
        return keys

    def delete_batch(self, ids: Sequence[str]) -> None:
        """Delete up to 1000 keys with a single DeleteObjects call."""
        response = self.client.delete_objects(
            Bucket=self.bucket,
            Delete={"Objects": [{"Key": key} for key in ids], "Quiet": True},
        )
        errors = response.get("Errors") or []
        if errors:
            first = errors[0]
            raise RuntimeError(
                f"Failed to delete {len(errors)} objects "
                f"(first: {first.get('Key')}: {first.get('Code')})"
            )
