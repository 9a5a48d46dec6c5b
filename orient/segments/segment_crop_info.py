from __future__ import annotations

from flask import Blueprint, jsonify, request

from orient.errors import NotFoundError
from orient.extensions import component


crop_info_bp = Blueprint("crop_info_bp", __name__, url_prefix="/api/crop-info")


def _repo():
    return component("crop_info_repository")


@crop_info_bp.get("")
def list_crop_info():
    rows = _repo().list(search=(request.args.get("search") or "").strip() or None)
    return jsonify([r.to_dict() for r in rows]), 200


@crop_info_bp.get("/<info_id>")
def get_crop_info(info_id: str):
    row = _repo().get(info_id)
    if row is None:
        raise NotFoundError("Crop info not found")
    return jsonify(row.to_dict()), 200


@crop_info_bp.post("")
def create_crop_info():
    row = _repo().create(request.get_json(silent=True))
    return jsonify(row.to_dict()), 200


@crop_info_bp.patch("/<info_id>")
def update_crop_info(info_id: str):
    row = _repo().update(info_id, request.get_json(silent=True))
    if row is None:
        raise NotFoundError("Crop info not found")
    return jsonify(row.to_dict()), 200


@crop_info_bp.delete("/<info_id>")
def delete_crop_info(info_id: str):
    if not _repo().delete(info_id):
        raise NotFoundError("Crop info not found")
    return jsonify({"message": "Crop info deleted successfully"}), 200
