# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory Transport adapters."""

from __future__ import annotations

from .client import Transport
from .models import HttpMethod, HttpRequest, HttpResponse


class StubTransport(Transport):
    """
    Deterministic, programmable Transport for tests.

    Responses are looked up by ``(method, url)`` first, then by ``url`` alone.
    Unmatched requests produce a no-response result.
    """

    def __init__(self, responses: dict[str, HttpResponse] | None = None):
        self._responses: dict[tuple[HttpMethod | None, str], HttpResponse] = {}
        for url, response in (responses or {}).items():
            self.add(url, response)
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse, method: HttpMethod | None = None) -> None:
        self._responses[(method, url)] = response

    @property
    def last_request(self) -> HttpRequest | None:
        return self.requests[-1] if self.requests else None

    async def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        for key in ((request.method, request.url), (None, request.url)):
            if key in self._responses:
                return self._responses[key]
        return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")

    async def aclose(self) -> None:
        self.closed = True
