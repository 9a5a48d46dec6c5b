from __future__ import annotations

import logging
from urllib.parse import quote

from orient.errors import NotFoundError, UnexpectedError, ValidationError
from orient.integrations.common import IntegrationRequestError
from orient.integrations.storage import ObjectStorageProvider, StoredObject
from orient.utils.ids import new_id

logger = logging.getLogger(__name__)

LISTING_IMAGE_PREFIX = "listings"


def split_object_path(path: str) -> tuple[str, str]:
    """``/bucket/a/b.jpg`` -> ``("bucket", "a/b.jpg")``."""
    if not path.startswith("/"):
        path = f"/{path}"
    parts = path.split("/")
    if len(parts) < 3 or not parts[1] or not "/".join(parts[2:]):
        raise ValidationError("Invalid object path")
    return parts[1], "/".join(parts[2:])


def public_image_url(bucket_name: str, object_name: str) -> str:
    return f"/api/images/{quote(bucket_name, safe='')}/{quote(object_name, safe='/')}"


def issue_listing_upload(provider: ObjectStorageProvider, *, ttl_seconds: int) -> dict:
    paths = provider.public_search_paths()
    if not paths:
        raise UnexpectedError("Object storage public path is not configured")
    full_path = f"{paths[0].rstrip('/')}/{LISTING_IMAGE_PREFIX}/{new_id()}.jpg"
    bucket_name, object_name = split_object_path(full_path)
    try:
        presigned = provider.presign_upload(
            bucket_name=bucket_name,
            object_name=object_name,
            ttl_seconds=ttl_seconds,
        )
    except IntegrationRequestError as e:
        logger.warning("upload_presign_failed provider=%s err=%s", provider.name, e)
        raise UnexpectedError("Failed to get upload URL")
    return {
        "uploadUrl": presigned.upload_url,
        "publicUrl": public_image_url(bucket_name, object_name),
        "bucketName": bucket_name,
        "objectName": object_name,
    }


def open_image(provider: ObjectStorageProvider, bucket_name: str, object_name: str) -> StoredObject:
    try:
        found = provider.open_object(bucket_name=bucket_name, object_name=object_name)
    except IntegrationRequestError as e:
        logger.warning("image_read_failed bucket=%s err=%s", bucket_name, e)
        raise UnexpectedError("Failed to read image")
    if found is None:
        raise NotFoundError("Image not found")
    return found
