# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Pluggable request authentication.

An `AuthProvider` turns (method, body, token) into the headers that
authenticate a request. When a client has one configured, its output replaces
the plain ``Authorization: Bearer <token>`` fallback entirely; a provider that
wants the bearer header must add it itself.
"""

from __future__ import annotations

import hashlib
import hmac
import time
import uuid
from typing import Protocol

from .http.headers import AUTHORIZATION, bearer
from .http.models import Headers, HttpMethod

HEADER_APP_ID = "x-app-id"
HEADER_BROWSER = "x-browser"
HEADER_BROWSER_SIGNATURE = "x-browser-sig"
HEADER_CLIENT = "x-client"
HEADER_REQUEST_SIGNATURE = "x-req-sig"
HEADER_REQUEST_NONCE = "x-req-nonce"
HEADER_REQUEST_TIMESTAMP = "x-req-timestamp"


class AuthProvider(Protocol):
    @property
    def headers(self) -> Headers:
        """Identification headers fixed at construction and sent with every request."""
        ...

    def generate_headers(self, method: HttpMethod, body: bytes | None, token: str | None) -> Headers:
        """Headers for one request; `body` is the serialized payload exactly as it is sent."""
        ...


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def timestamp_ms() -> int:
    return int(time.time() * 1000)


class ApiAuthentication(AuthProvider):
    """
    Client fingerprinting plus per-request HMAC signing.

    The signature covers ``app_id + method + timestamp + nonce`` and, when the
    request has a body, the SHA-256 of the body bytes as sent. The method is
    signed in lower case (``get``, ``post``). A fresh UUID nonce and a
    millisecond timestamp are generated for every call so the server can
    reject replays outside its freshness window.
    """

    def __init__(self, device_uuid: str, app_id: str, app_key: str, user_agent: str = "SwiftlyRest"):
        self._app_key = app_key.encode("utf-8")

        fingerprint = sha256_hex(f"{device_uuid} | {user_agent}".encode())
        self._headers: Headers = {
            HEADER_APP_ID: app_id,
            HEADER_BROWSER: fingerprint,
            HEADER_BROWSER_SIGNATURE: sha256_hex(fingerprint.encode("utf-8")),
            HEADER_CLIENT: user_agent,
        }

    @property
    def headers(self) -> Headers:
        return dict(self._headers)

    def sign(self, plain: str) -> str:
        return hmac.new(self._app_key, plain.encode("utf-8"), hashlib.sha256).hexdigest()

    def generate_headers(self, method: HttpMethod, body: bytes | None, token: str | None) -> Headers:
        headers = self.headers

        nonce = str(uuid.uuid4()).upper()
        timestamp = str(timestamp_ms())
        app_id = self._headers.get(HEADER_APP_ID, "")

        plain = f"{app_id}{HttpMethod(method).value.lower()}{timestamp}{nonce}"
        if body is not None:
            plain += sha256_hex(body)

        headers[HEADER_REQUEST_SIGNATURE] = self.sign(plain)
        headers[HEADER_REQUEST_NONCE] = nonce
        headers[HEADER_REQUEST_TIMESTAMP] = timestamp

        if token is not None:
            headers[AUTHORIZATION] = bearer(token)

        return headers


__all__ = [
    "ApiAuthentication",
    "AuthProvider",
    "HEADER_APP_ID",
    "HEADER_BROWSER",
    "HEADER_BROWSER_SIGNATURE",
    "HEADER_CLIENT",
    "HEADER_REQUEST_NONCE",
    "HEADER_REQUEST_SIGNATURE",
    "HEADER_REQUEST_TIMESTAMP",
]
