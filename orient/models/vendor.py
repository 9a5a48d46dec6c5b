from datetime import datetime

import sqlalchemy as sa

from orient.extensions import db
from orient.utils.ids import new_id


VENDOR_STATUSES = ("pending", "approved", "rejected")


class Vendor(db.Model):
    __tablename__ = "vendors"

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, unique=True, index=True)
    category_id = db.Column(db.String(36), db.ForeignKey("categories.id"), nullable=True, index=True)

    store_name = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=True)
    logo_url = db.Column(db.Text, nullable=True)
    phone = db.Column(db.Text, nullable=True)
    whatsapp = db.Column(db.Text, nullable=True)
    email = db.Column(db.Text, nullable=True)

    # pending, approved, rejected
    status = db.Column(db.String(16), nullable=False, default="pending", server_default="pending", index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, server_default=sa.func.now(), index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, server_default=sa.func.now())

    user = db.relationship("User", back_populates="vendor")
    category = db.relationship("Category")
    products = db.relationship("Product", back_populates="vendor", lazy="dynamic")

    @property
    def is_approved(self) -> bool:
        return (self.status or "") == "approved"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "categoryId": self.category_id,
            "storeName": self.store_name,
            "description": self.description,
            "logoUrl": self.logo_url,
            "phone": self.phone,
            "whatsapp": self.whatsapp,
            "email": self.email,
            "status": self.status or "pending",
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
