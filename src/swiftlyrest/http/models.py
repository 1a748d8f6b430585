# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across SwiftlyRest."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

Headers = dict[str, str]


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    def __str__(self) -> str:
        return self.value


@dataclass
class HttpRequest:
    """Normalized request representation consumed by Transport implementations."""

    url: str
    method: HttpMethod = HttpMethod.GET
    headers: Headers = field(default_factory=dict)
    body: bytes | None = None
    timeout: float | None = None


@dataclass
class HttpResponse:
    """
    Normalized HTTP response.

    `ok` only reports whether the transport produced a response at all; HTTP
    error statuses still arrive with `ok=True` and are classified by the executor.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None

    @classmethod
    def from_text(cls, status_code: int, text: str = "", headers: Headers | None = None) -> HttpResponse:
        """Helper for building canned responses (stubs and tests)."""
        return cls(
            ok=True,
            status_code=status_code,
            headers=dict(headers or {}),
            text=text,
            content=text.encode("utf-8"),
        )

    @classmethod
    def failed(cls, exc: BaseException) -> HttpResponse:
        """Represent a request that never produced a response."""
        return cls(ok=False, error_message=str(exc), error_type=type(exc).__name__)
