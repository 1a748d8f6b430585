# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import hashlib
import hmac
import json
import unittest

import pytest

from swiftlyrest.auth import ApiAuthentication
from swiftlyrest.client import SwiftlyRest, create_default_client
from swiftlyrest.config import RestSettings
from swiftlyrest.endpoint import Endpoint
from swiftlyrest.errors import InvalidURL, NotFound
from swiftlyrest.http.adapters import StubTransport
from swiftlyrest.http.models import HttpMethod, HttpResponse
from swiftlyrest.result import Failure, Success
from swiftlyrest.serialization import JsonSerializer
from swiftlyrest.storage import MemoryStorage

BASE = "https://api.example.com"


def _client(**kwargs) -> SwiftlyRest:
    kwargs.setdefault("transport", StubTransport())
    kwargs.setdefault("storage", MemoryStorage())
    kwargs.setdefault("settings", RestSettings())
    return SwiftlyRest(BASE, **kwargs)


class IndentedSerializer(JsonSerializer):
    def encode(self, value):
        return json.dumps(value, indent=2).encode("utf-8")


class TestSwiftlyRestConfiguration(unittest.TestCase):
    def test_defaults(self):
        client = _client()
        self.assertEqual(client.base_url, BASE)
        self.assertEqual(client.content_type, "application/json")
        self.assertEqual(client.tag, "[SwiftlyRest]")
        self.assertFalse(client.logging_enabled)
        self.assertIsNone(client.auth)
        self.assertFalse(client.has_token())

    def test_set_base_url_rejects_invalid_urls(self):
        client = _client()
        for bad in ["", "not a url", "/relative/only", "api.example.com"]:
            with self.assertRaises(InvalidURL) as ctx:
                client.set_base_url(bad)
            self.assertEqual(ctx.exception.url, bad)
        self.assertEqual(client.base_url, BASE)

    def test_constructor_validates_base_url(self):
        with self.assertRaises(InvalidURL):
            SwiftlyRest("nope", transport=StubTransport(), storage=MemoryStorage())

    def test_token_set_and_clear(self):
        client = _client(token="abc")
        self.assertTrue(client.has_token())
        client.clear_token()
        self.assertFalse(client.has_token())
        client.set_token("def")
        self.assertEqual(client.token, "def")
        client.set_token(None)
        self.assertFalse(client.has_token())

    def test_generate_headers_uses_bearer_fallback_without_provider(self):
        client = _client(token="abc")
        self.assertEqual(client.generate_headers(HttpMethod.GET), {"Authorization": "Bearer abc"})
        client.clear_token()
        self.assertEqual(client.generate_headers(HttpMethod.GET), {})

    def test_generate_headers_delegates_to_provider(self):
        provider = ApiAuthentication(device_uuid="d", app_id="app", app_key="k")
        client = _client(token="abc", auth=provider)
        headers = client.generate_headers(HttpMethod.POST, {"a": 1})
        self.assertEqual(headers["x-app-id"], "app")
        self.assertEqual(headers["Authorization"], "Bearer abc")
        self.assertIn("x-req-sig", headers)

        client.configure_auth(None)
        self.assertEqual(client.generate_headers(HttpMethod.POST, {"a": 1}), {"Authorization": "Bearer abc"})

    def test_generate_headers_signs_body_as_the_client_serializes_it(self):
        provider = ApiAuthentication(device_uuid="d", app_id="app", app_key="k")
        client = _client(auth=provider, serializer=IndentedSerializer())
        headers = client.generate_headers(HttpMethod.POST, {"a": 1})
        body_hash = hashlib.sha256(b'{\n  "a": 1\n}').hexdigest()
        plain = f"apppost{headers['x-req-timestamp']}{headers['x-req-nonce']}{body_hash}"
        self.assertEqual(headers["x-req-sig"], hmac.new(b"k", plain.encode(), hashlib.sha256).hexdigest())


class TestTokenPersistence(unittest.TestCase):
    def test_store_given_token(self):
        storage = MemoryStorage()
        client = _client(storage=storage, token="current")
        client.store_token("explicit")
        self.assertEqual(storage.values, {"token": "explicit"})

    def test_store_current_token_under_custom_key(self):
        storage = MemoryStorage()
        client = _client(storage=storage, token="current")
        client.store_token(key="session")
        self.assertEqual(storage.values, {"session": "current"})

    def test_store_without_any_token_deletes_entry(self):
        storage = MemoryStorage({"token": "stale"})
        client = _client(storage=storage)
        client.store_token()
        self.assertEqual(storage.values, {})

    def test_load_token_sets_current_token(self):
        client = _client(storage=MemoryStorage({"token": "saved"}))
        client.load_token()
        self.assertEqual(client.token, "saved")

    def test_load_missing_token_is_ignored(self):
        client = _client(storage=MemoryStorage(), token="keep")
        client.load_token("absent")
        self.assertEqual(client.token, "keep")

    def test_default_key_comes_from_settings(self):
        storage = MemoryStorage()
        client = _client(storage=storage, settings=RestSettings(token_key="jwt"), token="current")
        client.store_token()
        self.assertEqual(storage.values, {"jwt": "current"})

        other = _client(storage=storage, settings=RestSettings(token_key="jwt"))
        other.load_token()
        self.assertEqual(other.token, "current")


def test_from_settings_applies_settings_and_overrides():
    settings = RestSettings(base_url=BASE, content_type="text/plain", logging_enabled=True, tag="[X]")
    client = create_default_client(settings, transport=StubTransport(), storage=MemoryStorage(), tag="[Y]")
    assert client.base_url == BASE
    assert client.content_type == "text/plain"
    assert client.logging_enabled is True
    assert client.tag == "[Y]"


def test_independent_clients_do_not_share_state():
    a = _client(token="a")
    b = _client()
    a.set_content_type("text/csv")
    assert b.token is None
    assert b.content_type == "application/json"


@pytest.mark.asyncio
async def test_verbs_send_fixed_method_and_body():
    transport = StubTransport()
    url = f"{BASE}/v1/items"
    for method in HttpMethod:
        transport.add(url, HttpResponse.from_text(200, '{"ok": true}'), method=method)
    client = _client(transport=transport)
    endpoint = Endpoint().with_version("v1").with_controller("items")

    results = [
        await client.get(endpoint, dict),
        await client.post(endpoint, dict, {"a": 1}),
        await client.put(endpoint, dict, {"a": 2}),
        await client.patch(endpoint, dict, {"a": 3}),
        await client.delete(endpoint, dict),
    ]

    assert all(isinstance(r, Success) and r.value == {"ok": True} for r in results)
    assert [(r.method, r.body) for r in transport.requests] == [
        (HttpMethod.GET, None),
        (HttpMethod.POST, b'{"a":1}'),
        (HttpMethod.PUT, b'{"a":2}'),
        (HttpMethod.PATCH, b'{"a":3}'),
        (HttpMethod.DELETE, None),
    ]


@pytest.mark.asyncio
async def test_post_with_none_body_sends_no_payload():
    transport = StubTransport({f"{BASE}/ping": HttpResponse.from_text(200, "{}")})
    client = _client(transport=transport)
    result = await client.post(Endpoint().with_path("ping"), dict, None)
    assert result.ok
    assert transport.last_request.body is None


@pytest.mark.asyncio
async def test_configuration_is_read_per_request():
    url = f"{BASE}/me"
    transport = StubTransport({url: HttpResponse.from_text(200, "{}")})
    client = _client(transport=transport)

    await client.get(Endpoint("/me"), dict)
    client.set_token("abc")
    client.set_content_type("application/xml")
    await client.get(Endpoint("/me"), dict)

    first, second = transport.requests
    assert "Authorization" not in first.headers
    assert second.headers["Authorization"] == "Bearer abc"
    assert second.headers["Content-Type"] == "application/xml"


@pytest.mark.asyncio
async def test_error_results_are_returned_not_raised():
    transport = StubTransport({f"{BASE}/missing": HttpResponse.from_text(404, "not found")})
    client = _client(transport=transport)
    result = await client.get(Endpoint("/missing"), dict)
    assert isinstance(result, Failure)
    assert isinstance(result.error, NotFound)
    with pytest.raises(NotFound):
        result.unwrap()


@pytest.mark.asyncio
async def test_async_context_manager_closes_only_owned_transport():
    injected = StubTransport()
    async with _client(transport=injected):
        pass
    assert injected.closed is False

    client = SwiftlyRest(BASE, storage=MemoryStorage(), settings=RestSettings())
    closed = []

    async def fake_aclose():
        closed.append(True)

    client.transport.aclose = fake_aclose
    async with client:
        pass
    assert closed == [True]


@pytest.mark.asyncio
async def test_signature_covers_the_bytes_on_the_wire():
    url = f"{BASE}/v1/users"
    transport = StubTransport({url: HttpResponse.from_text(201, "{}")})
    provider = ApiAuthentication(device_uuid="d", app_id="app", app_key="secret")
    client = _client(transport=transport, auth=provider, serializer=IndentedSerializer())

    result = await client.post(Endpoint("/v1/users"), dict, {"name": "Ada"})

    assert result.ok
    sent = transport.last_request
    assert sent.body == b'{\n  "name": "Ada"\n}'
    body_hash = hashlib.sha256(sent.body).hexdigest()
    plain = f"apppost{sent.headers['x-req-timestamp']}{sent.headers['x-req-nonce']}{body_hash}"
    assert sent.headers["x-req-sig"] == hmac.new(b"secret", plain.encode(), hashlib.sha256).hexdigest()
