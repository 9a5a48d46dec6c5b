from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from orient.errors import ForbiddenError, NotFoundError
from orient.extensions import db
from orient.models import ContactClick, Product, ProductView, User, Vendor
from orient.services.marketplace_service import get_vendor, require_user
from orient.services.schemas import CONTACT_CLICK_FIELDS, PRODUCT_VIEW_FIELDS, validate_payload

logger = logging.getLogger(__name__)

USER_AGENT_MAX = 512


@dataclass
class ViewerContext:
    user_id: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None

    @classmethod
    def from_request(cls, request_obj, user_id: str | None = None) -> "ViewerContext":
        forwarded = (request_obj.headers.get("X-Forwarded-For") or "").strip()
        ip = forwarded.split(",")[0].strip() if forwarded else (request_obj.remote_addr or "")
        agent = (request_obj.headers.get("User-Agent") or "").strip()
        return cls(
            user_id=user_id,
            ip_address=ip or None,
            user_agent=agent[:USER_AGENT_MAX] or None,
        )


def _insert(row, missing_message: str):
    db.session.add(row)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise NotFoundError(missing_message)
    return row


def track_product_view(payload: Any, viewer: ViewerContext) -> ProductView:
    data = validate_payload(PRODUCT_VIEW_FIELDS, payload)
    row = ProductView(
        product_id=data["product_id"],
        user_id=viewer.user_id,
        ip_address=viewer.ip_address,
        user_agent=viewer.user_agent,
    )
    return _insert(row, "Product not found")


def track_contact_click(payload: Any, viewer: ViewerContext) -> ContactClick:
    data = validate_payload(CONTACT_CLICK_FIELDS, payload)
    row = ContactClick(
        vendor_id=data["vendor_id"],
        contact_type=data["contact_type"],
        user_id=viewer.user_id,
        ip_address=viewer.ip_address,
        user_agent=viewer.user_agent,
    )
    return _insert(row, "Vendor not found")


def get_vendor_analytics(vendor_id: str) -> dict:
    """All-time view counts per product and click counts per contact type."""
    vendor = get_vendor(vendor_id)

    view_rows = (
        db.session.query(
            Product.id,
            Product.name,
            func.count(ProductView.id),
        )
        .outerjoin(ProductView, ProductView.product_id == Product.id)
        .filter(Product.vendor_id == vendor.id)
        .group_by(Product.id, Product.name, Product.created_at)
        .order_by(Product.created_at.desc())
        .all()
    )
    click_rows = (
        db.session.query(ContactClick.contact_type, func.count(ContactClick.id))
        .filter(ContactClick.vendor_id == vendor.id)
        .group_by(ContactClick.contact_type)
        .order_by(ContactClick.contact_type.asc())
        .all()
    )

    return {
        "productViews": [
            {"productId": pid, "productName": name, "viewCount": int(count or 0)}
            for pid, name, count in view_rows
        ],
        "contactClicks": [
            {"contactType": ctype, "clickCount": int(count or 0)}
            for ctype, count in click_rows
        ],
    }


def get_vendor_analytics_for(actor: User | None, vendor_id: str) -> dict:
    user = require_user(actor)
    vendor: Vendor = get_vendor(vendor_id)
    if vendor.user_id != user.id and not user.is_admin:
        raise ForbiddenError("Not your vendor account")
    return get_vendor_analytics(vendor.id)
