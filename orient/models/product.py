from datetime import datetime

import sqlalchemy as sa

from orient.extensions import db
from orient.models.listing import format_price
from orient.utils.ids import new_id


PRODUCT_STATUSES = ("active", "pending", "flagged", "removed")


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    vendor_id = db.Column(db.String(36), db.ForeignKey("vendors.id"), nullable=False, index=True)
    category_id = db.Column(db.String(36), db.ForeignKey("categories.id"), nullable=True, index=True)

    name = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=True)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    image_url = db.Column(db.Text, nullable=True)

    # active, pending, flagged, removed
    status = db.Column(db.String(16), nullable=False, default="active", server_default="active", index=True)
    flag_reason = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, server_default=sa.func.now(), index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, server_default=sa.func.now())

    vendor = db.relationship("Vendor", back_populates="products")
    category = db.relationship("Category")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "vendorId": self.vendor_id,
            "categoryId": self.category_id,
            "name": self.name,
            "description": self.description,
            "price": format_price(self.price),
            "imageUrl": self.image_url,
            "status": self.status or "active",
            "flagReason": self.flag_reason,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
