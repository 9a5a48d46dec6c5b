"""Vendor, product and category rules for the authenticated marketplace.

- a product can only be created by a vendor whose status is ``approved``
- only the user linked to a vendor may edit that vendor's products
- only admins change vendor status or flag products
- deleting a product moves it to ``removed``; rows stay so analytics events
  keep pointing at something
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.exc import IntegrityError

from orient.errors import ForbiddenError, NotFoundError, UnauthorizedError, ValidationError
from orient.extensions import db
from orient.models import Category, Product, User, Vendor, PRODUCT_STATUSES
from orient.services.schemas import (
    CATEGORY_FIELDS,
    PRODUCT_FIELDS,
    PRODUCT_FLAG_FIELDS,
    VENDOR_FIELDS,
    VENDOR_STATUS_FIELDS,
    slugify,
    validate_payload,
)
from orient.services.search import substring_clause

logger = logging.getLogger(__name__)


def require_user(user: User | None) -> User:
    if user is None:
        raise UnauthorizedError()
    return user


def require_admin(user: User | None) -> User:
    user = require_user(user)
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user


def _commit_or_not_found(message: str) -> None:
    # Unknown foreign keys (category, vendor) surface as integrity errors.
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise NotFoundError(message)


# Categories

def list_categories() -> list[Category]:
    return Category.query.order_by(Category.name.asc()).all()


def create_category(actor: User | None, payload: Any) -> Category:
    require_admin(actor)
    data = validate_payload(CATEGORY_FIELDS, payload)
    slug = data.get("slug") or slugify(data["name"])
    if not slug:
        raise ValidationError.for_field("slug", "Required")
    exists = Category.query.filter((Category.name == data["name"]) | (Category.slug == slug)).first()
    if exists is not None:
        raise ValidationError("Category already exists", code="CATEGORY_EXISTS")
    row = Category(name=data["name"], slug=slug)
    db.session.add(row)
    db.session.commit()
    return row


# Vendors

def get_vendor(vendor_id: str) -> Vendor:
    row = db.session.get(Vendor, str(vendor_id)) if vendor_id else None
    if row is None:
        raise NotFoundError("Vendor not found")
    return row


def get_vendor_for_user(user: User | None) -> Vendor:
    user = require_user(user)
    row = Vendor.query.filter_by(user_id=user.id).first()
    if row is None:
        raise NotFoundError("Vendor not found")
    return row


def list_vendors(status: str | None = None) -> list[Vendor]:
    q = Vendor.query
    if status:
        q = q.filter(Vendor.status == status)
    return q.order_by(Vendor.created_at.desc()).all()


def create_vendor(actor: User | None, payload: Any) -> Vendor:
    user = require_user(actor)
    if Vendor.query.filter_by(user_id=user.id).first() is not None:
        raise ValidationError("User already has a vendor account", code="VENDOR_EXISTS")
    data = validate_payload(VENDOR_FIELDS, payload)
    row = Vendor(user_id=user.id, status="pending", **data)
    db.session.add(row)
    if (user.role or "customer") == "customer":
        user.role = "vendor"
        user.updated_at = datetime.utcnow()
    _commit_or_not_found("Category not found")
    logger.info("vendor_created id=%s user_id=%s", row.id, user.id)
    return row


def update_vendor(actor: User | None, vendor_id: str, payload: Any) -> Vendor:
    user = require_user(actor)
    row = get_vendor(vendor_id)
    if row.user_id != user.id and not user.is_admin:
        raise ForbiddenError("Not your vendor account")
    patch = validate_payload(VENDOR_FIELDS, payload, partial=True)
    for attr, value in patch.items():
        setattr(row, attr, value)
    row.updated_at = datetime.utcnow()
    _commit_or_not_found("Category not found")
    return row


def set_vendor_status(actor: User | None, vendor_id: str, payload: Any) -> Vendor:
    admin = require_admin(actor)
    row = get_vendor(vendor_id)
    data = validate_payload(VENDOR_STATUS_FIELDS, payload)
    previous = row.status
    row.status = data["status"]
    row.updated_at = datetime.utcnow()
    db.session.commit()
    logger.info(
        "vendor_status_changed id=%s from=%s to=%s admin_id=%s",
        row.id,
        previous,
        row.status,
        admin.id,
    )
    return row


# Products

def get_product(product_id: str) -> Product:
    row = db.session.get(Product, str(product_id)) if product_id else None
    if row is None:
        raise NotFoundError("Product not found")
    return row


def list_products(
    *,
    vendor_id: str | None = None,
    category_id: str | None = None,
    status: str | None = None,
    search: str | None = None,
) -> list[Product]:
    q = Product.query
    if vendor_id:
        q = q.filter(Product.vendor_id == vendor_id)
    if category_id:
        q = q.filter(Product.category_id == category_id)
    if status:
        if status not in PRODUCT_STATUSES:
            raise ValidationError.for_field("status", f"Must be one of {', '.join(PRODUCT_STATUSES)}")
        q = q.filter(Product.status == status)
    else:
        q = q.filter(Product.status != "removed")
    clause = substring_clause(search, Product.name, Product.description)
    if clause is not None:
        q = q.filter(clause)
    return q.order_by(Product.created_at.desc()).all()


def _owned_product(user: User, product_id: str) -> Product:
    row = get_product(product_id)
    vendor = row.vendor
    if vendor is None or vendor.user_id != user.id:
        raise ForbiddenError("Not your product")
    return row


def create_product(actor: User | None, payload: Any) -> Product:
    user = require_user(actor)
    vendor = Vendor.query.filter_by(user_id=user.id).first()
    if vendor is None:
        raise ForbiddenError("A vendor account is required")
    if not vendor.is_approved:
        raise ForbiddenError("Vendor is not approved")
    data = validate_payload(PRODUCT_FIELDS, payload)
    row = Product(vendor_id=vendor.id, **data)
    if not row.status:
        row.status = "active"
    db.session.add(row)
    _commit_or_not_found("Category not found")
    logger.info("product_created id=%s vendor_id=%s", row.id, vendor.id)
    return row


def update_product(actor: User | None, product_id: str, payload: Any) -> Product:
    user = require_user(actor)
    row = _owned_product(user, product_id)
    patch = validate_payload(PRODUCT_FIELDS, payload, partial=True)
    if "status" in patch and row.status in ("flagged", "removed"):
        raise ForbiddenError(f"Product is {row.status}; status is controlled by moderation")
    for attr, value in patch.items():
        if attr == "status" and value is None:
            continue
        setattr(row, attr, value)
    row.updated_at = datetime.utcnow()
    _commit_or_not_found("Category not found")
    return row


def remove_product(actor: User | None, product_id: str) -> Product:
    user = require_user(actor)
    if user.is_admin:
        row = get_product(product_id)
    else:
        row = _owned_product(user, product_id)
    row.status = "removed"
    row.updated_at = datetime.utcnow()
    db.session.commit()
    logger.info("product_removed id=%s by=%s", row.id, user.id)
    return row


def flag_product(actor: User | None, product_id: str, payload: Any) -> Product:
    admin = require_admin(actor)
    row = get_product(product_id)
    data = validate_payload(PRODUCT_FLAG_FIELDS, payload)
    row.status = "flagged"
    row.flag_reason = data["flag_reason"]
    row.updated_at = datetime.utcnow()
    db.session.commit()
    logger.info("product_flagged id=%s admin_id=%s", row.id, admin.id)
    return row
