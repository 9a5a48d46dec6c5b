from __future__ import annotations

import secrets
from datetime import datetime, timedelta

from orient.integrations.storage.base import ObjectStorageProvider, PresignedUpload, StoredObject


class MockObjectStorageProvider(ObjectStorageProvider):
    """In-memory bucket used in dev and tests."""

    name = "mock"

    def __init__(self, public_paths: list[str] | None = None):
        self._public_paths = list(public_paths or ["/orient-public/public"])
        self._objects: dict[tuple[str, str], tuple[bytes, str]] = {}

    def public_search_paths(self) -> list[str]:
        return list(self._public_paths)

    def presign_upload(self, *, bucket_name: str, object_name: str, ttl_seconds: int) -> PresignedUpload:
        token = secrets.token_urlsafe(16)
        return PresignedUpload(
            upload_url=f"https://storage.mock.local/{bucket_name}/{object_name}?token={token}",
            bucket_name=bucket_name,
            object_name=object_name,
            provider=self.name,
            expires_at=datetime.utcnow() + timedelta(seconds=int(ttl_seconds)),
        )

    def put_object(self, *, bucket_name: str, object_name: str, data: bytes, content_type: str = "image/jpeg") -> None:
        self._objects[(bucket_name, object_name)] = (bytes(data), content_type)

    def open_object(self, *, bucket_name: str, object_name: str) -> StoredObject | None:
        found = self._objects.get((bucket_name, object_name))
        if found is None:
            return None
        data, content_type = found
        return StoredObject(content_type=content_type, size=len(data), chunks=iter([data]))
