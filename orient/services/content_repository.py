from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from orient.errors import NotFoundError
from orient.extensions import db
from orient.models import Answer, CropInfo, Question
from orient.services.schemas import (
    ANSWER_FIELDS,
    CROP_INFO_FIELDS,
    QUESTION_FIELDS,
    validate_payload,
)
from orient.services.search import keyword_clause, substring_clause

logger = logging.getLogger(__name__)


class CropInfoRepository:
    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def get(self, info_id: str) -> CropInfo | None:
        if not info_id:
            return None
        return self.session.get(CropInfo, str(info_id))

    def list(self, search: str | None = None) -> list[CropInfo]:
        q = self.session.query(CropInfo)
        clause = substring_clause(search, CropInfo.title, CropInfo.body)
        if clause is not None:
            q = q.filter(clause)
        return q.order_by(CropInfo.created_at.desc()).all()

    def create(self, payload: Any) -> CropInfo:
        data = validate_payload(CROP_INFO_FIELDS, payload)
        row = CropInfo(
            title=data["title"],
            body=data["body"],
            media_url=data.get("media_url"),
        )
        row.tags = data.get("tags") or []
        self.session.add(row)
        self.session.commit()
        return row

    def update(self, info_id: str, payload: Any) -> CropInfo | None:
        patch = validate_payload(CROP_INFO_FIELDS, payload, partial=True)
        row = self.get(info_id)
        if row is None:
            return None
        for attr, value in patch.items():
            if attr == "tags":
                row.tags = value or []
            else:
                setattr(row, attr, value)
        self.session.commit()
        return row

    def delete(self, info_id: str) -> bool:
        row = self.get(info_id)
        if row is None:
            return False
        self.session.delete(row)
        self.session.commit()
        return True


class ForumRepository:
    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def get_question(self, question_id: str) -> Question | None:
        if not question_id:
            return None
        return self.session.get(Question, str(question_id))

    def find_question_by_title(self, title: str) -> Question | None:
        return self.session.query(Question).filter(Question.title == str(title or "").strip()).first()

    def list_questions(self, search: str | None = None) -> list[Question]:
        q = self.session.query(Question)
        clause = keyword_clause(search, Question.title, Question.body)
        if clause is not None:
            q = q.filter(clause)
        return q.order_by(Question.created_at.desc()).all()

    def create_question(self, payload: Any) -> Question:
        data = validate_payload(QUESTION_FIELDS, payload)
        row = Question(**data)
        self.session.add(row)
        self.session.commit()
        return row

    def delete_question(self, question_id: str) -> bool:
        row = self.get_question(question_id)
        if row is None:
            return False
        self.session.delete(row)
        self.session.commit()
        return True

    def list_answers(self, question_id: str) -> list[Answer]:
        return (
            self.session.query(Answer)
            .filter(Answer.question_id == str(question_id))
            .order_by(Answer.created_at.desc())
            .all()
        )

    def create_answer(self, payload: Any) -> Answer:
        data = validate_payload(ANSWER_FIELDS, payload)
        row = Answer(**data)
        self.session.add(row)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.info("answer_rejected_unknown_question question_id=%s", data.get("question_id"))
            raise NotFoundError("Question not found")
        return row

    def delete_answer(self, answer_id: str) -> bool:
        row = self.session.get(Answer, str(answer_id)) if answer_id else None
        if row is None:
            return False
        self.session.delete(row)
        self.session.commit()
        return True
