from __future__ import annotations

from flask import Blueprint, jsonify, request

from orient.extensions import component


listings_bp = Blueprint("listings_bp", __name__, url_prefix="/api/listings")


def _service():
    return component("listing_service")


def _arg(name: str) -> str | None:
    value = (request.args.get(name) or "").strip()
    return value or None


@listings_bp.get("")
def list_listings():
    rows = _service().list(
        role=_arg("role"),
        crop_type=_arg("cropType"),
        search=_arg("search"),
    )
    return jsonify(rows), 200


@listings_bp.get("/<listing_id>")
def get_listing(listing_id: str):
    return jsonify(_service().get(listing_id)), 200


@listings_bp.post("")
def create_listing():
    payload = request.get_json(silent=True)
    return jsonify(_service().create(payload)), 200


@listings_bp.patch("/<listing_id>")
def update_listing(listing_id: str):
    payload = request.get_json(silent=True)
    return jsonify(_service().update(listing_id, payload)), 200


@listings_bp.delete("/<listing_id>")
def delete_listing(listing_id: str):
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        data = {}
    _service().delete_with_credentials(
        listing_id,
        data.get("vendorName"),
        data.get("password"),
    )
    return jsonify({"message": "Listing deleted successfully"}), 200
