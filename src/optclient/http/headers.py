# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Case-insensitive header helpers.

Responses keep headers as plain lowercase-keyed dicts so lookups behave the
same for httpx responses and in-memory ones.
"""

from __future__ import annotations

from collections.abc import Mapping


def normalize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping (dict or httpx.Headers)."""
    if not headers:
        return {}
    return {str(key).lower(): "" if value is None else str(value) for key, value in headers.items()}


def header_value(headers: Mapping[str, str] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default

    lower = name.lower()
    for key, value in headers.items():
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


__all__ = ["header_value", "normalize_headers"]
