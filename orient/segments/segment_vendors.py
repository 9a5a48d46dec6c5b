from __future__ import annotations

from flask import Blueprint, jsonify, request

from orient.errors import ValidationError
from orient.models import VENDOR_STATUSES
from orient.services.marketplace_service import (
    create_vendor,
    get_vendor,
    get_vendor_for_user,
    list_vendors,
    set_vendor_status,
    update_vendor,
)
from orient.utils.auth import current_user


vendors_bp = Blueprint("vendors_bp", __name__, url_prefix="/api/vendors")


@vendors_bp.get("")
def vendors_index():
    status = (request.args.get("status") or "").strip().lower() or None
    if status and status not in VENDOR_STATUSES:
        raise ValidationError.for_field("status", f"Must be one of {', '.join(VENDOR_STATUSES)}")
    return jsonify([v.to_dict() for v in list_vendors(status)]), 200


@vendors_bp.get("/me")
def vendors_me():
    return jsonify(get_vendor_for_user(current_user()).to_dict()), 200


@vendors_bp.get("/<vendor_id>")
def vendors_get(vendor_id: str):
    return jsonify(get_vendor(vendor_id).to_dict()), 200


@vendors_bp.post("")
def vendors_create():
    row = create_vendor(current_user(), request.get_json(silent=True))
    return jsonify(row.to_dict()), 201


@vendors_bp.patch("/<vendor_id>")
def vendors_update(vendor_id: str):
    row = update_vendor(current_user(), vendor_id, request.get_json(silent=True))
    return jsonify(row.to_dict()), 200


@vendors_bp.patch("/<vendor_id>/status")
def vendors_set_status(vendor_id: str):
    row = set_vendor_status(current_user(), vendor_id, request.get_json(silent=True))
    return jsonify(row.to_dict()), 200
