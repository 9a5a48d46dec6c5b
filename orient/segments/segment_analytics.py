from __future__ import annotations

from flask import Blueprint, jsonify, request

from orient.services.analytics_service import (
    ViewerContext,
    get_vendor_analytics_for,
    track_contact_click,
    track_product_view,
)
from orient.utils.auth import current_user


analytics_bp = Blueprint("analytics_bp", __name__, url_prefix="/api/analytics")


def _viewer() -> ViewerContext:
    user = current_user()
    return ViewerContext.from_request(request, user_id=user.id if user else None)


@analytics_bp.post("/product-view")
def analytics_product_view():
    row = track_product_view(request.get_json(silent=True), _viewer())
    return jsonify({"ok": True, "id": row.id}), 201


@analytics_bp.post("/contact-click")
def analytics_contact_click():
    row = track_contact_click(request.get_json(silent=True), _viewer())
    return jsonify({"ok": True, "id": row.id}), 201


@analytics_bp.get("/vendor/<vendor_id>")
def analytics_vendor(vendor_id: str):
    return jsonify(get_vendor_analytics_for(current_user(), vendor_id)), 200
