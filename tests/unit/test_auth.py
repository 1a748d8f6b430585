# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import hashlib
import hmac

import pytest

from swiftlyrest import auth as auth_module
from swiftlyrest.auth import (
    HEADER_APP_ID,
    HEADER_BROWSER,
    HEADER_BROWSER_SIGNATURE,
    HEADER_CLIENT,
    HEADER_REQUEST_NONCE,
    HEADER_REQUEST_SIGNATURE,
    HEADER_REQUEST_TIMESTAMP,
    ApiAuthentication,
)
from swiftlyrest.http.models import HttpMethod


def _sha(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _hmac(key: str, text: str) -> str:
    return hmac.new(key.encode("utf-8"), text.encode("utf-8"), hashlib.sha256).hexdigest()


@pytest.fixture
def frozen_clock(monkeypatch):
    monkeypatch.setattr(auth_module, "timestamp_ms", lambda: 1700000000123)


def test_baseline_headers_fingerprint_device_and_user_agent():
    provider = ApiAuthentication(device_uuid="dev-1", app_id="app", app_key="key", user_agent="UA/1")
    fingerprint = _sha("dev-1 | UA/1")
    assert provider.headers == {
        HEADER_APP_ID: "app",
        HEADER_BROWSER: fingerprint,
        HEADER_BROWSER_SIGNATURE: _sha(fingerprint),
        HEADER_CLIENT: "UA/1",
    }


def test_headers_property_returns_a_copy():
    provider = ApiAuthentication(device_uuid="d", app_id="a", app_key="k")
    provider.headers["x-app-id"] = "tampered"
    assert provider.headers["x-app-id"] == "a"


def test_signature_without_body(frozen_clock):
    provider = ApiAuthentication(device_uuid="d", app_id="app", app_key="secret")
    headers = provider.generate_headers(HttpMethod.GET, None, None)

    nonce = headers[HEADER_REQUEST_NONCE]
    assert headers[HEADER_REQUEST_TIMESTAMP] == "1700000000123"
    assert headers[HEADER_REQUEST_SIGNATURE] == _hmac("secret", f"appget1700000000123{nonce}")
    assert "Authorization" not in headers
    for key, value in provider.headers.items():
        assert headers[key] == value


def test_signature_covers_body_bytes_hash(frozen_clock):
    provider = ApiAuthentication(device_uuid="d", app_id="app", app_key="secret")
    headers = provider.generate_headers(HttpMethod.POST, b'{"name":"Ada"}', "jwt")

    nonce = headers[HEADER_REQUEST_NONCE]
    body_hash = _sha('{"name":"Ada"}')
    assert headers[HEADER_REQUEST_SIGNATURE] == _hmac("secret", f"apppost1700000000123{nonce}{body_hash}")
    assert headers["Authorization"] == "Bearer jwt"


def test_each_call_uses_a_fresh_nonce():
    provider = ApiAuthentication(device_uuid="d", app_id="app", app_key="secret")
    first = provider.generate_headers(HttpMethod.GET, None, None)
    second = provider.generate_headers(HttpMethod.GET, None, None)
    assert first[HEADER_REQUEST_NONCE] != second[HEADER_REQUEST_NONCE]
    assert first[HEADER_REQUEST_SIGNATURE] != second[HEADER_REQUEST_SIGNATURE]


def test_body_bytes_are_hashed_verbatim(frozen_clock):
    provider = ApiAuthentication(device_uuid="d", app_id="app", app_key="secret")
    body = b'{\n  "name": "Ada"\n}'
    headers = provider.generate_headers(HttpMethod.PATCH, body, None)

    nonce = headers[HEADER_REQUEST_NONCE]
    expected = _hmac("secret", f"apppatch1700000000123{nonce}{hashlib.sha256(body).hexdigest()}")
    assert headers[HEADER_REQUEST_SIGNATURE] == expected


def test_empty_body_is_still_hashed(frozen_clock):
    provider = ApiAuthentication(device_uuid="d", app_id="app", app_key="secret")
    headers = provider.generate_headers(HttpMethod.PUT, b"", None)

    nonce = headers[HEADER_REQUEST_NONCE]
    assert headers[HEADER_REQUEST_SIGNATURE] == _hmac("secret", f"appput1700000000123{nonce}{_sha('')}")
