# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed Transport implementation."""

from __future__ import annotations

import httpx

from ..config import RestSettings, load_settings
from .client import Transport
from .models import HttpRequest, HttpResponse


class HttpxTransport(Transport):
    """Asynchronous httpx client wrapper."""

    def __init__(self, settings: RestSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_settings()
        self._client = client or httpx.AsyncClient(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    async def send(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers)
        if not any(key.lower() == "user-agent" for key in headers):
            headers["User-Agent"] = self.settings.user_agent

        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        try:
            resp = await self._client.request(
                request.method.value,
                request.url,
                headers=headers,
                content=request.body,
                timeout=timeout,
            )
        except Exception as exc:  # noqa: BLE001
            return HttpResponse.failed(exc)

        content = resp.content
        encoding = resp.encoding or "utf-8"
        try:
            text = content.decode(encoding, errors="replace")
        except LookupError:
            text = content.decode("utf-8", errors="replace")

        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=dict(resp.headers),
            text=text,
            content=content,
            url=str(resp.url),
        )

    async def aclose(self) -> None:
        await self._client.aclose()
