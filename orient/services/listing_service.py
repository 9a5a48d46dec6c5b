from __future__ import annotations

import logging
from typing import Any

from orient.errors import ForbiddenError, NotFoundError, ValidationError
from orient.models import Listing
from orient.services.credential_hasher import CredentialHasher
from orient.services.listing_repository import ListingRepository
from orient.services.schemas import LISTING_FIELDS, validate_payload

logger = logging.getLogger(__name__)

CREDENTIAL_KEYS = ("password", "passwordHash", "password_hash")
CREDENTIALS_MISMATCH_MESSAGE = "Invalid vendor name or password"


def sanitize_for_client(listing):
    """Strip credential fields from a listing dict (or a list of them)."""
    if listing is None:
        return None
    if isinstance(listing, (list, tuple)):
        return [sanitize_for_client(item) for item in listing]
    if isinstance(listing, Listing):
        listing = listing.to_dict()
    return {k: v for k, v in dict(listing).items() if k not in CREDENTIAL_KEYS}


class ListingService:
    """Ownership gate in front of ``ListingRepository``.

    Every value returned from here has been through ``sanitize_for_client``.
    """

    def __init__(self, repository: ListingRepository, hasher: CredentialHasher):
        self.repository = repository
        self.hasher = hasher

    def get(self, listing_id: str) -> dict:
        row = self.repository.get(listing_id)
        if row is None:
            raise NotFoundError("Listing not found")
        return sanitize_for_client(row)

    def list(self, *, role: str | None = None, crop_type: str | None = None, search: str | None = None) -> list[dict]:
        rows = self.repository.list(role=role, crop_type=crop_type, search=search)
        return sanitize_for_client(rows)

    def create(self, payload: Any) -> dict:
        data = validate_payload(LISTING_FIELDS, payload)
        data["password_hash"] = self.hasher.hash(data.pop("password"))
        row = self.repository.create(data)
        logger.info("listing_created id=%s role=%s", row.id, row.role)
        return sanitize_for_client(row)

    def update(self, listing_id: str, payload: Any) -> dict:
        patch = validate_payload(LISTING_FIELDS, payload, partial=True)
        if "password" in patch:
            patch["password_hash"] = self.hasher.hash(patch.pop("password"))
        row = self.repository.update(listing_id, patch)
        if row is None:
            raise NotFoundError("Listing not found")
        logger.info("listing_updated id=%s fields=%s", row.id, ",".join(sorted(patch.keys())))
        return sanitize_for_client(row)

    def delete_with_credentials(self, listing_id: str, vendor_name_claim: str | None, password_claim: str | None) -> None:
        if not vendor_name_claim or not password_claim:
            raise ValidationError("Vendor name and password are required")
        if not isinstance(vendor_name_claim, str) or not isinstance(password_claim, str):
            raise ValidationError("Vendor name and password must be strings")

        row = self.repository.get(listing_id)
        if row is None:
            raise NotFoundError("Listing not found")

        name_ok = row.vendor_name == vendor_name_claim
        # Hash check runs even when the name already failed.
        password_ok = self.hasher.verify(password_claim, row.password_hash)
        if not (name_ok and password_ok):
            logger.info("listing_delete_denied id=%s", row.id)
            raise ForbiddenError(CREDENTIALS_MISMATCH_MESSAGE)

        if not self.repository.delete(row.id):
            raise NotFoundError("Listing not found")
        logger.info("listing_deleted id=%s", listing_id)
