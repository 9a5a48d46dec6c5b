from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable


@dataclass
class PresignedUpload:
    upload_url: str
    bucket_name: str
    object_name: str
    provider: str
    expires_at: datetime | None = None


@dataclass
class StoredObject:
    content_type: str
    size: int | None
    chunks: Iterable[bytes]


class ObjectStorageProvider:
    name = "unknown"

    def public_search_paths(self) -> list[str]:
        raise NotImplementedError

    def presign_upload(self, *, bucket_name: str, object_name: str, ttl_seconds: int) -> PresignedUpload:
        raise NotImplementedError

    def open_object(self, *, bucket_name: str, object_name: str) -> StoredObject | None:
        raise NotImplementedError
