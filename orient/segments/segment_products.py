from __future__ import annotations

from flask import Blueprint, jsonify, request

from orient.services.marketplace_service import (
    create_product,
    flag_product,
    get_product,
    list_products,
    remove_product,
    update_product,
)
from orient.utils.auth import current_user


products_bp = Blueprint("products_bp", __name__, url_prefix="/api/products")


def _arg(name: str) -> str | None:
    value = (request.args.get(name) or "").strip()
    return value or None


@products_bp.get("")
def products_index():
    rows = list_products(
        vendor_id=_arg("vendorId"),
        category_id=_arg("categoryId"),
        status=_arg("status"),
        search=_arg("search"),
    )
    return jsonify([p.to_dict() for p in rows]), 200


@products_bp.get("/<product_id>")
def products_get(product_id: str):
    return jsonify(get_product(product_id).to_dict()), 200


@products_bp.post("")
def products_create():
    row = create_product(current_user(), request.get_json(silent=True))
    return jsonify(row.to_dict()), 201


@products_bp.patch("/<product_id>")
def products_update(product_id: str):
    row = update_product(current_user(), product_id, request.get_json(silent=True))
    return jsonify(row.to_dict()), 200


@products_bp.delete("/<product_id>")
def products_delete(product_id: str):
    row = remove_product(current_user(), product_id)
    return jsonify({"message": "Product removed", "product": row.to_dict()}), 200


@products_bp.post("/<product_id>/flag")
def products_flag(product_id: str):
    row = flag_product(current_user(), product_id, request.get_json(silent=True))
    return jsonify(row.to_dict()), 200
