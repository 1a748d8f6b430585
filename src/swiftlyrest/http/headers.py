# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header layering utilities.

Headers are plain dicts keyed exactly as supplied; no case folding is applied,
so ``authorization`` and ``Authorization`` are distinct keys when merging.
"""

from __future__ import annotations

from collections.abc import Mapping

from .models import Headers

CONTENT_TYPE = "Content-Type"
AUTHORIZATION = "Authorization"


def bearer(token: str) -> str:
    return f"Bearer {token}"


def merge_headers(*layers: Mapping[str, str] | None) -> Headers:
    """Merge header layers left to right; later layers win on key collision."""
    out: Headers = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            out[str(key)] = str(value)
    return out


__all__ = ["AUTHORIZATION", "CONTENT_TYPE", "bearer", "merge_headers"]
