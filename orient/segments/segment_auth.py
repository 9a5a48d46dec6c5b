from __future__ import annotations

from datetime import datetime

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import IntegrityError

from orient.errors import UnauthorizedError, ValidationError
from orient.extensions import db
from orient.models import User
from orient.services.marketplace_service import require_user
from orient.services.schemas import LOGIN_FIELDS, REGISTER_FIELDS, validate_payload
from orient.utils.auth import current_user
from orient.utils.jwt_utils import create_token


auth_bp = Blueprint("auth_bp", __name__, url_prefix="/api/auth")

INVALID_LOGIN_MESSAGE = "Invalid email or password"


def _session_payload(user: User) -> dict:
    return {
        "ok": True,
        "token": create_token(user.id),
        "user": user.to_dict(),
    }


@auth_bp.post("/register")
def register():
    data = validate_payload(REGISTER_FIELDS, request.get_json(silent=True))
    email = data["email"].lower()
    if User.query.filter_by(email=email).first() is not None:
        raise ValidationError("Email already in use", code="EMAIL_EXISTS", field="email")

    now = datetime.utcnow()
    user = User(
        email=email,
        first_name=data.get("first_name"),
        last_name=data.get("last_name"),
        role="customer",
        created_at=now,
        updated_at=now,
    )
    user.set_password(data["password"])
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ValidationError("Email already in use", code="EMAIL_EXISTS", field="email")
    current_app.logger.info("user_registered id=%s", user.id)
    return jsonify(_session_payload(user)), 201


@auth_bp.post("/login")
def login():
    data = validate_payload(LOGIN_FIELDS, request.get_json(silent=True))
    user = User.query.filter_by(email=data["email"].lower()).first()
    if user is None or not user.check_password(data["password"]):
        current_app.logger.info("login_failed")
        raise UnauthorizedError(INVALID_LOGIN_MESSAGE)
    return jsonify(_session_payload(user)), 200


@auth_bp.get("/me")
def me():
    user = require_user(current_user())
    body = user.to_dict()
    vendor = user.vendor
    body["vendor"] = vendor.to_dict() if vendor is not None else None
    return jsonify(body), 200
