from datetime import datetime

import sqlalchemy as sa

from orient.extensions import db
from orient.utils.ids import new_id


class Question(db.Model):
    __tablename__ = "questions"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.Text, nullable=False)
    body = db.Column(db.Text, nullable=False)
    author_name = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, server_default=sa.func.now(), index=True)

    answers = db.relationship(
        "Answer",
        back_populates="question",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "authorName": self.author_name,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


class Answer(db.Model):
    __tablename__ = "answers"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    question_id = db.Column(
        db.String(36),
        db.ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    body = db.Column(db.Text, nullable=False)
    author_name = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, server_default=sa.func.now(), index=True)

    question = db.relationship("Question", back_populates="answers")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "questionId": self.question_id,
            "body": self.body,
            "authorName": self.author_name,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
