# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers shared by the endpoint builder and the executor."""

from __future__ import annotations

import re
from urllib.parse import urljoin, urlparse

import httpx

# Characters RFC 3986 never allows unescaped in a URI reference.
_DISALLOWED_RE = re.compile(r'[\s\x00-\x1f\x7f<>"{}|\\^`]')
_BAD_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def is_valid_reference(value: str) -> bool:
    """
    Return True when `value` parses as a URI reference (relative or absolute).

    Nothing is escaped here: an unfilled ``{placeholder}`` or a raw space makes
    the reference invalid rather than being percent-encoded.
    """
    if not value:
        return False
    if _DISALLOWED_RE.search(value) or _BAD_PERCENT_RE.search(value):
        return False
    try:
        httpx.URL(value)
    except (httpx.InvalidURL, TypeError, ValueError):
        return False
    return True


def is_absolute_url(value: str | None) -> bool:
    """Return True when the URL carries both a scheme and a host."""
    if not value:
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme and parsed.netloc)


def resolve_url(base_url: str | None, fragment: str) -> str:
    """
    Resolve an endpoint fragment against the base URL (RFC 3986 resolution).

    Example:
      https://api.example.com + /v1/users -> https://api.example.com/v1/users
    """
    if not base_url:
        return fragment
    return urljoin(base_url, fragment)


__all__ = ["is_absolute_url", "is_valid_reference", "resolve_url"]
