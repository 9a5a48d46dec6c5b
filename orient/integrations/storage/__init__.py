from orient.integrations.storage.base import ObjectStorageProvider, PresignedUpload, StoredObject
from orient.integrations.storage.factory import build_storage_provider

__all__ = [
    "ObjectStorageProvider",
    "PresignedUpload",
    "StoredObject",
    "build_storage_provider",
]
