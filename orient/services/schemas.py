from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from orient.errors import ValidationError
from orient.models import LISTING_ROLES, VENDOR_STATUSES


PRICE_PATTERN = re.compile(r"^\d{1,8}(\.\d{1,2})?$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

LISTING_PASSWORD_MIN_LENGTH = 6
CONTACT_PHONE_MIN_LENGTH = 10
USER_PASSWORD_MIN_LENGTH = 8


def _text(value: Any) -> str:
    return str(value if value is not None else "").strip()


def slugify(value: str) -> str:
    raw = (value or "").strip().lower()
    if not raw:
        return ""
    raw = re.sub(r"[^a-z0-9]+", "-", raw)
    raw = re.sub(r"-{2,}", "-", raw)
    return raw.strip("-")


def _field(
    key: str,
    attr: str,
    *,
    field_type: str = "text",
    required: bool = False,
    min_length: int | None = None,
    options: tuple[str, ...] | list[str] | None = None,
) -> dict[str, Any]:
    return {
        "key": key,
        "attr": attr,
        "type": field_type,
        "required": bool(required),
        "min_length": min_length,
        "options": tuple(options or ()),
    }


LISTING_FIELDS = [
    _field("role", "role", field_type="choice", required=True, options=LISTING_ROLES),
    _field("vendorName", "vendor_name", required=True, min_length=1),
    _field("itemName", "item_name", required=True, min_length=1),
    _field("description", "description"),
    _field("price", "price", field_type="price", required=True),
    _field("cropType", "crop_type"),
    _field("contactPhone", "contact_phone", required=True, min_length=CONTACT_PHONE_MIN_LENGTH),
    _field("contactEmail", "contact_email", field_type="email", required=True),
    _field("imageUrl", "image_url"),
    _field("password", "password", field_type="secret", required=True, min_length=LISTING_PASSWORD_MIN_LENGTH),
]

CROP_INFO_FIELDS = [
    _field("title", "title", required=True, min_length=1),
    _field("body", "body", required=True, min_length=1),
    _field("mediaUrl", "media_url"),
    _field("tags", "tags", field_type="tags"),
]

QUESTION_FIELDS = [
    _field("title", "title", required=True, min_length=1),
    _field("body", "body", required=True, min_length=1),
    _field("authorName", "author_name", required=True, min_length=1),
]

ANSWER_FIELDS = [
    _field("questionId", "question_id", required=True, min_length=1),
    _field("body", "body", required=True, min_length=1),
    _field("authorName", "author_name", required=True, min_length=1),
]

CATEGORY_FIELDS = [
    _field("name", "name", required=True, min_length=1),
    _field("slug", "slug", field_type="slug"),
]

VENDOR_FIELDS = [
    _field("storeName", "store_name", required=True, min_length=1),
    _field("description", "description"),
    _field("logoUrl", "logo_url"),
    _field("categoryId", "category_id"),
    _field("phone", "phone"),
    _field("whatsapp", "whatsapp"),
    _field("email", "email", field_type="email"),
]

VENDOR_STATUS_FIELDS = [
    _field("status", "status", field_type="choice", required=True, options=VENDOR_STATUSES),
]

PRODUCT_FIELDS = [
    _field("name", "name", required=True, min_length=1),
    _field("description", "description"),
    _field("price", "price", field_type="price", required=True),
    _field("imageUrl", "image_url"),
    _field("categoryId", "category_id"),
    _field("status", "status", field_type="choice", options=("active", "pending")),
]

PRODUCT_FLAG_FIELDS = [
    _field("reason", "flag_reason", required=True, min_length=1),
]

CONTACT_CLICK_FIELDS = [
    _field("vendorId", "vendor_id", required=True, min_length=1),
    _field("contactType", "contact_type", required=True, min_length=1),
]

PRODUCT_VIEW_FIELDS = [
    _field("productId", "product_id", required=True, min_length=1),
]

REGISTER_FIELDS = [
    _field("email", "email", field_type="email", required=True),
    _field("password", "password", field_type="secret", required=True, min_length=USER_PASSWORD_MIN_LENGTH),
    _field("firstName", "first_name"),
    _field("lastName", "last_name"),
]

LOGIN_FIELDS = [
    _field("email", "email", required=True, min_length=1),
    _field("password", "password", field_type="secret", required=True, min_length=1),
]


def _clean_value(rule: dict[str, Any], raw: Any) -> Any:
    key = rule["key"]
    field_type = rule["type"]

    if field_type == "tags":
        if raw is None:
            return []
        if isinstance(raw, str):
            raw = [part for part in raw.split(",")]
        if not isinstance(raw, (list, tuple, set)):
            raise ValidationError.for_field(key, "Expected a list of strings")
        return [_text(v) for v in raw if _text(v)]

    if isinstance(raw, (dict, list, tuple, set)):
        raise ValidationError.for_field(key, "Expected a string")
    if isinstance(raw, bool):
        raise ValidationError.for_field(key, "Expected a string")

    # Secrets are kept verbatim; everything else is trimmed.
    text = str(raw) if (field_type == "secret" and raw is not None) else _text(raw)

    if not text:
        if rule["required"]:
            raise ValidationError.for_field(key, "Required")
        return None

    min_length = rule.get("min_length")
    if min_length and len(text) < int(min_length):
        raise ValidationError.for_field(key, f"Must be at least {int(min_length)} characters")

    if field_type == "choice":
        options = rule["options"]
        if text not in options:
            raise ValidationError.for_field(key, f"Must be one of {', '.join(options)}")
        return text

    if field_type == "email":
        if not EMAIL_PATTERN.match(text):
            raise ValidationError.for_field(key, "Invalid email")
        return text

    if field_type == "price":
        if not PRICE_PATTERN.match(text):
            raise ValidationError.for_field(key, "Price must be a valid number with up to 2 decimal places")
        try:
            return Decimal(text)
        except InvalidOperation:
            raise ValidationError.for_field(key, "Price must be a valid number with up to 2 decimal places")

    if field_type == "slug":
        if not SLUG_PATTERN.match(text):
            raise ValidationError.for_field(key, "Use lowercase letters, digits and dashes")
        return text

    return text


def validate_payload(fields: list[dict[str, Any]], payload: Any, *, partial: bool = False) -> dict[str, Any]:
    """Validate ``payload`` against a field list and return model-ready values.

    Keys outside the schema are dropped. In ``partial`` mode only keys that are
    present in the payload are checked, which is how PATCH bodies are applied.
    The first failing field raises ``ValidationError`` ("<field>: <reason>").
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    cleaned: dict[str, Any] = {}
    for rule in fields:
        key = rule["key"]
        if key not in payload:
            if partial:
                continue
            if rule["required"]:
                raise ValidationError.for_field(key, "Required")
            continue
        cleaned[rule["attr"]] = _clean_value(rule, payload.get(key))
    return cleaned
