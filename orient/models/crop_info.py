from datetime import datetime
import json

import sqlalchemy as sa

from orient.extensions import db
from orient.utils.ids import new_id


class CropInfo(db.Model):
    __tablename__ = "crop_info"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.Text, nullable=False)
    body = db.Column(db.Text, nullable=False)
    media_url = db.Column(db.Text, nullable=True)

    # JSON array of unique tag strings
    tags_json = db.Column("tags", db.Text, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, server_default=sa.func.now(), index=True)

    @property
    def tags(self) -> list[str]:
        raw = (self.tags_json or "").strip()
        if not raw:
            return []
        try:
            parsed = json.loads(raw)
        except ValueError:
            return []
        if not isinstance(parsed, list):
            return []
        return [str(t) for t in parsed]

    @tags.setter
    def tags(self, values) -> None:
        unique: list[str] = []
        for value in values or []:
            tag = str(value or "").strip()
            if tag and tag not in unique:
                unique.append(tag)
        self.tags_json = json.dumps(unique)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "mediaUrl": self.media_url,
            "tags": self.tags,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
