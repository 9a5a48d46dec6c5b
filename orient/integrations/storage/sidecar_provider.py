from __future__ import annotations

from datetime import datetime, timedelta

import requests

from orient.integrations.common import IntegrationRequestError
from orient.integrations.storage.base import ObjectStorageProvider, PresignedUpload, StoredObject

STREAM_CHUNK_BYTES = 64 * 1024
READ_URL_TTL_SECONDS = 300


class SidecarObjectStorageProvider(ObjectStorageProvider):
    """Signs object URLs through the storage sidecar's HTTP endpoint."""

    name = "sidecar"

    def __init__(self, endpoint: str, public_paths: list[str], timeout: float = 25):
        self.endpoint = endpoint.rstrip("/")
        self._public_paths = list(public_paths)
        self.timeout = timeout

    def public_search_paths(self) -> list[str]:
        return list(self._public_paths)

    def _sign(self, *, bucket_name: str, object_name: str, method: str, ttl_seconds: int) -> tuple[str, datetime]:
        expires_at = datetime.utcnow() + timedelta(seconds=int(ttl_seconds))
        payload = {
            "bucket_name": bucket_name,
            "object_name": object_name,
            "method": method,
            "expires_at": expires_at.isoformat() + "Z",
        }
        try:
            r = requests.post(
                f"{self.endpoint}/object-storage/signed-object-url",
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise IntegrationRequestError(f"STORAGE_SIGN_FAILED:{exc}") from exc
        if r.status_code < 200 or r.status_code >= 300:
            raise IntegrationRequestError(f"STORAGE_SIGN_FAILED:HTTP {r.status_code}")
        j = r.json() if r.content else {}
        signed_url = (j.get("signed_url") or "").strip()
        if not signed_url:
            raise IntegrationRequestError("STORAGE_SIGN_FAILED:missing signed_url")
        return signed_url, expires_at

    def presign_upload(self, *, bucket_name: str, object_name: str, ttl_seconds: int) -> PresignedUpload:
        url, expires_at = self._sign(
            bucket_name=bucket_name,
            object_name=object_name,
            method="PUT",
            ttl_seconds=ttl_seconds,
        )
        return PresignedUpload(
            upload_url=url,
            bucket_name=bucket_name,
            object_name=object_name,
            provider=self.name,
            expires_at=expires_at,
        )

    def open_object(self, *, bucket_name: str, object_name: str) -> StoredObject | None:
        url, _ = self._sign(
            bucket_name=bucket_name,
            object_name=object_name,
            method="GET",
            ttl_seconds=READ_URL_TTL_SECONDS,
        )
        try:
            r = requests.get(url, stream=True, timeout=self.timeout)
        except requests.RequestException as exc:
            raise IntegrationRequestError(f"STORAGE_READ_FAILED:{exc}") from exc
        if r.status_code == 404:
            r.close()
            return None
        if r.status_code < 200 or r.status_code >= 300:
            r.close()
            raise IntegrationRequestError(f"STORAGE_READ_FAILED:HTTP {r.status_code}")
        size_raw = (r.headers.get("Content-Length") or "").strip()
        try:
            size = int(size_raw) if size_raw else None
        except ValueError:
            size = None
        return StoredObject(
            content_type=(r.headers.get("Content-Type") or "image/jpeg"),
            size=size,
            chunks=r.iter_content(chunk_size=STREAM_CHUNK_BYTES),
        )
