from datetime import datetime
from decimal import Decimal, InvalidOperation

import sqlalchemy as sa

from orient.extensions import db
from orient.utils.ids import new_id


LISTING_ROLES = ("vendor", "buyer")


def format_price(value) -> str | None:
    if value is None:
        return None
    try:
        return str(Decimal(str(value)).quantize(Decimal("0.01")))
    except (InvalidOperation, ValueError):
        return str(value)


class Listing(db.Model):
    __tablename__ = "listings"

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    # Who posted it: "vendor" or "buyer"
    role = db.Column(db.String(16), nullable=False, index=True)

    vendor_name = db.Column(db.Text, nullable=False)
    item_name = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=True)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    crop_type = db.Column(db.Text, nullable=True, index=True)

    contact_phone = db.Column(db.Text, nullable=False)
    contact_email = db.Column(db.Text, nullable=False)
    image_url = db.Column(db.Text, nullable=True)

    # Column keeps the legacy "password" name; it only ever holds a hash.
    password_hash = db.Column("password", db.Text, nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, server_default=sa.func.now(), index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, server_default=sa.func.now())

    def to_dict(self) -> dict:
        """Full record, credential included. Callers crossing the API
        boundary go through ``sanitize_for_client``."""
        return {
            "id": self.id,
            "role": self.role,
            "vendorName": self.vendor_name,
            "itemName": self.item_name,
            "description": self.description,
            "price": format_price(self.price),
            "cropType": self.crop_type,
            "contactPhone": self.contact_phone,
            "contactEmail": self.contact_email,
            "imageUrl": self.image_url,
            "passwordHash": self.password_hash,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
