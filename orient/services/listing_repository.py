from __future__ import annotations

from datetime import datetime
from typing import Any

from orient.extensions import db
from orient.models import Listing
from orient.services.search import substring_clause


# Attributes a caller may write; id and timestamps are owned by the repository.
WRITABLE_ATTRS = (
    "role",
    "vendor_name",
    "item_name",
    "description",
    "price",
    "crop_type",
    "contact_phone",
    "contact_email",
    "image_url",
    "password_hash",
)


class ListingRepository:
    """Persistence for listings. Performs no authorization and no hashing."""

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def get(self, listing_id: str) -> Listing | None:
        if not listing_id:
            return None
        return self.session.get(Listing, str(listing_id))

    def list(self, *, role: str | None = None, crop_type: str | None = None, search: str | None = None) -> list[Listing]:
        q = self.session.query(Listing)
        if role:
            q = q.filter(Listing.role == role)
        if crop_type:
            q = q.filter(Listing.crop_type == crop_type)
        clause = substring_clause(search, Listing.item_name, Listing.description, Listing.vendor_name)
        if clause is not None:
            q = q.filter(clause)
        return q.order_by(Listing.created_at.desc()).all()

    def create(self, data: dict[str, Any]) -> Listing:
        now = datetime.utcnow()
        row = Listing(created_at=now, updated_at=now)
        for attr in WRITABLE_ATTRS:
            if attr in data:
                setattr(row, attr, data[attr])
        self.session.add(row)
        self.session.commit()
        return row

    def update(self, listing_id: str, patch: dict[str, Any]) -> Listing | None:
        row = self.get(listing_id)
        if row is None:
            return None
        for attr in WRITABLE_ATTRS:
            if attr in patch:
                setattr(row, attr, patch[attr])
        row.updated_at = datetime.utcnow()
        self.session.commit()
        return row

    def delete(self, listing_id: str) -> bool:
        row = self.get(listing_id)
        if row is None:
            return False
        self.session.delete(row)
        self.session.commit()
        return True
