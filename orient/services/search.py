"""Text filters shared by the listing, forum, crop info and product queries.

Listings and crop info use a plain substring match; questions are searched by
keyword. All matching is case-insensitive (``ILIKE``).
"""
from __future__ import annotations

from sqlalchemy import or_


MIN_KEYWORD_LENGTH = 3


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def substring_clause(query: str | None, *columns):
    """OR of ``column ILIKE %query%`` over ``columns``; None for a blank query."""
    term = (query or "").strip()
    if not term or not columns:
        return None
    pattern = _like_pattern(term)
    return or_(*[col.ilike(pattern, escape="\\") for col in columns])


def extract_keywords(query: str | None) -> list[str]:
    """Whitespace tokens, lowercased, with words of two letters or fewer dropped."""
    words = (query or "").lower().split()
    keywords: list[str] = []
    for word in words:
        if len(word) < MIN_KEYWORD_LENGTH:
            continue
        if word not in keywords:
            keywords.append(word)
    return keywords


def keyword_clause(query: str | None, *columns):
    """Any keyword in any column. None when no keyword survives, which callers
    treat as "no filter" and return every row."""
    keywords = extract_keywords(query)
    if not keywords or not columns:
        return None
    conditions = []
    for keyword in keywords:
        pattern = _like_pattern(keyword)
        for col in columns:
            conditions.append(col.ilike(pattern, escape="\\"))
    return or_(*conditions)
