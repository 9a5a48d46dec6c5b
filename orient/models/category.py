from datetime import datetime

from orient.extensions import db
from orient.utils.ids import new_id


class Category(db.Model):
    __tablename__ = "categories"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(120), nullable=False, unique=True)
    slug = db.Column(db.String(140), nullable=False, unique=True, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name or "",
            "slug": self.slug or "",
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
