from __future__ import annotations

from flask import Blueprint, Response, current_app, jsonify, stream_with_context

from orient.extensions import component
from orient.services.uploads import issue_listing_upload, open_image


uploads_bp = Blueprint("uploads_bp", __name__, url_prefix="/api")

IMAGE_CACHE_CONTROL = "public, max-age=31536000"


@uploads_bp.post("/upload-image")
def upload_image():
    result = issue_listing_upload(
        component("storage"),
        ttl_seconds=int(current_app.config.get("UPLOAD_URL_TTL_SECONDS", 900)),
    )
    return jsonify(result), 200


@uploads_bp.get("/images/<bucket_name>/<path:object_name>")
def get_image(bucket_name: str, object_name: str):
    stored = open_image(component("storage"), bucket_name, object_name)
    resp = Response(stream_with_context(stored.chunks), mimetype=stored.content_type)
    resp.headers["Cache-Control"] = IMAGE_CACHE_CONTROL
    if stored.size is not None:
        resp.headers["Content-Length"] = str(stored.size)
    return resp
