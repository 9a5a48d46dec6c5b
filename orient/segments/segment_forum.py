from __future__ import annotations

from flask import Blueprint, jsonify, request

from orient.errors import NotFoundError
from orient.extensions import component


forum_bp = Blueprint("forum_bp", __name__, url_prefix="/api")


def _repo():
    return component("forum_repository")


@forum_bp.get("/questions")
def list_questions():
    rows = _repo().list_questions(search=request.args.get("search"))
    return jsonify([r.to_dict() for r in rows]), 200


@forum_bp.get("/questions/<question_id>")
def get_question(question_id: str):
    row = _repo().get_question(question_id)
    if row is None:
        raise NotFoundError("Question not found")
    return jsonify(row.to_dict()), 200


@forum_bp.post("/questions")
def create_question():
    row = _repo().create_question(request.get_json(silent=True))
    return jsonify(row.to_dict()), 200


@forum_bp.delete("/questions/<question_id>")
def delete_question(question_id: str):
    if not _repo().delete_question(question_id):
        raise NotFoundError("Question not found")
    return jsonify({"message": "Question deleted successfully"}), 200


@forum_bp.get("/questions/<question_id>/answers")
def list_answers(question_id: str):
    repo = _repo()
    if repo.get_question(question_id) is None:
        raise NotFoundError("Question not found")
    return jsonify([r.to_dict() for r in repo.list_answers(question_id)]), 200


@forum_bp.post("/answers")
def create_answer():
    row = _repo().create_answer(request.get_json(silent=True))
    return jsonify(row.to_dict()), 200


@forum_bp.delete("/answers/<answer_id>")
def delete_answer(answer_id: str):
    if not _repo().delete_answer(answer_id):
        raise NotFoundError("Answer not found")
    return jsonify({"message": "Answer deleted successfully"}), 200
