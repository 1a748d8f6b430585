# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request execution pipeline.

One call to `RequestExecutor.execute` performs, in order:

1. build the endpoint fragment (``InvalidURL`` on failure, nothing is sent)
2. resolve it against the base URL (``InvalidURL`` unless absolute)
3. serialize the body (``BadRequestBody`` on failure, nothing is sent)
4. layer headers: extra headers, ``Content-Type``, then the auth provider's
   output for the serialized body or, with no provider,
   ``Authorization: Bearer <token>``
5. send through the transport (``NoResponse`` when nothing comes back)
6. classify the status: 2xx is decoded into the requested type
   (``UnexpectedResponseFormat`` when that fails); other codes map to their
   error variant

The executor never retries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, TypeVar

from .auth import AuthProvider
from .endpoint import EndpointInterface
from .errors import (
    BadRequestBody,
    InvalidURL,
    NoResponse,
    SwiftlyRestError,
    UnexpectedResponseFormat,
    error_for_status,
    is_success_status,
)
from .http.client import Transport
from .http.headers import AUTHORIZATION, CONTENT_TYPE, bearer, merge_headers
from .http.models import Headers, HttpMethod, HttpRequest
from .http.url import is_absolute_url, resolve_url
from .log import RequestLog
from .result import Failure, Result, Success
from .serialization import BodyEncodingError, JsonSerializer, ResponseDecodingError, Serializer

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RequestConfig:
    """Client configuration captured once at the start of a request."""

    base_url: str | None = None
    content_type: str = "application/json"
    logging_enabled: bool = False
    tag: str = "[SwiftlyRest]"
    auth: AuthProvider | None = None
    token: str | None = None


def auth_headers(config: RequestConfig, method: HttpMethod, body: bytes | None) -> Headers:
    """Authentication layer only: provider output, else the bearer fallback."""
    if config.auth is not None:
        return dict(config.auth.generate_headers(method, body, config.token))
    if config.token is not None:
        return {AUTHORIZATION: bearer(config.token)}
    return {}


class RequestExecutor:
    def __init__(self, transport: Transport, serializer: Serializer | None = None):
        self.transport = transport
        self.serializer = serializer or JsonSerializer()

    async def execute(
        self,
        config: RequestConfig,
        endpoint: EndpointInterface,
        method: HttpMethod,
        *,
        response_type: type[T],
        body: Any | None = None,
        headers: Headers | None = None,
        timeout: float | None = None,
    ) -> Result[T]:
        method = HttpMethod(method)
        log = RequestLog(config.tag, config.logging_enabled)

        try:
            fragment = endpoint.build()
        except InvalidURL:
            log.write("invalidURL", "Failed to build the URL: %s", endpoint.url)
            return self._fail(method, InvalidURL(endpoint.url))

        url = resolve_url(config.base_url, fragment)
        if not is_absolute_url(url):
            log.write("invalidURL", "Failed to build the URL: %s%s", config.base_url or "", fragment)
            return self._fail(method, InvalidURL(url))

        log.request_url(url)

        sent_headers = merge_headers(headers, {CONTENT_TYPE: config.content_type})

        payload: bytes | None = None
        if body is not None:
            try:
                payload = self.serializer.encode(body)
            except BodyEncodingError as exc:
                return self._fail(method, BadRequestBody(url=url, headers=sent_headers, reason=str(exc)))

        # the provider signs the exact bytes that go on the wire
        sent_headers = merge_headers(sent_headers, auth_headers(config, method, payload))

        log.request_headers(sent_headers)
        if payload is not None:
            log.request_body(payload)

        request = HttpRequest(url=url, method=method, headers=sent_headers, body=payload, timeout=timeout)
        try:
            response = await self.transport.send(request)
        except Exception as exc:  # noqa: BLE001
            log.write("requestError", "No response from the server")
            return self._fail(
                method,
                NoResponse(url=url, headers=sent_headers, body=payload, reason=f"{type(exc).__name__}: {exc}"),
            )

        if response is None or not response.ok or response.status_code is None:
            log.write("requestError", "No response from the server")
            reason = response.error_message if response is not None else None
            return self._fail(method, NoResponse(url=url, headers=sent_headers, body=payload, reason=reason))

        log.response(response.text)

        if is_success_status(response.status_code):
            try:
                value = self.serializer.decode(response.content, response_type)
            except ResponseDecodingError as exc:
                return self._fail(
                    method,
                    UnexpectedResponseFormat(
                        url=url,
                        headers=sent_headers,
                        body=payload,
                        response=response.text,
                        status_code=response.status_code,
                        reason=str(exc),
                    ),
                )
            return Success(value)

        return self._fail(
            method,
            error_for_status(
                response.status_code,
                url=url,
                headers=sent_headers,
                body=payload,
                response=response.text,
            ),
        )

    @staticmethod
    def _fail(method: HttpMethod, error: SwiftlyRestError) -> Failure:
        logger.debug("%s %s failed: %s", method.value, error.url, error.kind.value)
        return Failure(error)


__all__ = ["RequestConfig", "RequestExecutor", "auth_headers"]
