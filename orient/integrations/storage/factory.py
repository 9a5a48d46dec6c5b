from __future__ import annotations

import os

from orient.integrations.common import IntegrationMisconfiguredError
from orient.integrations.storage.base import ObjectStorageProvider
from orient.integrations.storage.mock_provider import MockObjectStorageProvider
from orient.integrations.storage.sidecar_provider import SidecarObjectStorageProvider


def _public_paths() -> list[str]:
    raw = (os.getenv("PUBLIC_OBJECT_SEARCH_PATHS") or "").strip()
    return [p.strip() for p in raw.split(",") if p.strip()]


def build_storage_provider() -> ObjectStorageProvider:
    provider = (os.getenv("OBJECT_STORAGE_PROVIDER") or "mock").strip().lower()

    if provider == "mock":
        return MockObjectStorageProvider(public_paths=_public_paths() or None)

    if provider != "sidecar":
        raise IntegrationMisconfiguredError(f"INTEGRATION_MISCONFIGURED:object_storage_provider={provider}")

    endpoint = (os.getenv("OBJECT_STORAGE_SIDECAR_URL") or "http://127.0.0.1:1106").strip()
    return SidecarObjectStorageProvider(endpoint=endpoint, public_paths=_public_paths())


def storage_health() -> dict:
    provider = (os.getenv("OBJECT_STORAGE_PROVIDER") or "mock").strip().lower()
    missing = []
    if provider == "sidecar" and not _public_paths():
        missing.append("PUBLIC_OBJECT_SEARCH_PATHS")
    if provider not in ("mock", "sidecar"):
        status = "misconfigured"
    elif missing:
        status = "misconfigured"
    else:
        status = "configured"
    return {
        "status": status,
        "provider": provider,
        "missing": missing,
    }
