from __future__ import annotations

from flask import Blueprint, jsonify, request

from orient.services.marketplace_service import create_category, list_categories
from orient.utils.auth import current_user


categories_bp = Blueprint("categories_bp", __name__, url_prefix="/api/categories")


@categories_bp.get("")
def categories_index():
    return jsonify([c.to_dict() for c in list_categories()]), 200


@categories_bp.post("")
def categories_create():
    row = create_category(current_user(), request.get_json(silent=True))
    return jsonify(row.to_dict()), 201
