#!/usr/bin/env python
"""
    Shared field validators and the response envelope helpers.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

from typing import Optional


def required_text(value: Optional[str]) -> str:
    if value is None:
        raise ValueError("is required")
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def make_pagination(total: int, limit: int, offset: int) -> dict:
    return {
        "total": total,
        "limit": limit,
        "offset": offset,
        "hasMore": (offset + limit) < total,
    }


def envelope(data=None, message: Optional[str] = None, pagination: Optional[dict] = None) -> dict:
    body = {"success": True, "data": data}
    if pagination is not None:
        body["pagination"] = pagination
    if message:
        body["message"] = message
    return body
