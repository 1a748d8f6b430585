# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level SwiftlyRest client facade."""

from __future__ import annotations

from contextlib import suppress
from typing import Any, TypeVar

from .auth import AuthProvider
from .config import DEFAULT_CONTENT_TYPE, DEFAULT_TAG, RestSettings, load_settings
from .endpoint import EndpointInterface
from .errors import InvalidURL
from .executor import RequestConfig, RequestExecutor, auth_headers
from .http.client import Transport, create_default_transport
from .http.models import Headers, HttpMethod
from .http.url import is_absolute_url
from .result import Result
from .serialization import Serializer
from .storage import KeyringStorage, SecureStorage

T = TypeVar("T")


class SwiftlyRest:
    """
    REST client bound to one base URL.

    Holds the base URL, content type, logging flag, optional auth provider and
    bearer token, and exposes the five HTTP verbs. Every verb returns a
    `Result` and never raises; configuration is read once at the start of each
    request.

    Configuration writes are plain attribute assignments. Changing the token or
    provider while requests are in flight is last-write-wins: a request that
    already started keeps the values it read.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        logging_enabled: bool = False,
        tag: str = DEFAULT_TAG,
        auth: AuthProvider | None = None,
        token: str | None = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
        transport: Transport | None = None,
        serializer: Serializer | None = None,
        storage: SecureStorage | None = None,
        settings: RestSettings | None = None,
    ):
        self.settings = settings or load_settings()
        self._base_url: str | None = None
        if base_url is not None:
            self.set_base_url(base_url)
        self._content_type = content_type
        self._logging_enabled = logging_enabled
        self._tag = tag
        self._auth = auth
        self._token = token
        self._owns_transport = transport is None
        self.transport = transport or create_default_transport(self.settings)
        self.executor = RequestExecutor(self.transport, serializer)
        self.storage = storage or KeyringStorage(self.settings.keyring_service)

    @classmethod
    def from_settings(cls, settings: RestSettings | None = None, **overrides: Any) -> SwiftlyRest:
        """Build a client from `RestSettings` (environment by default); keyword overrides win."""
        settings = settings or load_settings()
        options: dict[str, Any] = {
            "base_url": settings.base_url,
            "logging_enabled": settings.logging_enabled,
            "tag": settings.tag,
            "content_type": settings.content_type,
        }
        options.update(overrides)
        return cls(settings=settings, **options)

    # configuration

    @property
    def base_url(self) -> str | None:
        return self._base_url

    @property
    def content_type(self) -> str:
        return self._content_type

    @property
    def logging_enabled(self) -> bool:
        return self._logging_enabled

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def auth(self) -> AuthProvider | None:
        return self._auth

    @property
    def token(self) -> str | None:
        return self._token

    def set_base_url(self, url: str) -> None:
        """Set the base URL; raises `InvalidURL` if it is not an absolute URL."""
        if not url or any(ch.isspace() for ch in url) or not is_absolute_url(url):
            raise InvalidURL(url)
        self._base_url = url

    def set_content_type(self, content_type: str) -> None:
        self._content_type = content_type

    def set_logging_enabled(self, enabled: bool) -> None:
        self._logging_enabled = enabled

    def configure_auth(self, auth: AuthProvider | None) -> None:
        """Use `auth` for every request's auth headers; None restores the bearer fallback."""
        self._auth = auth

    def set_token(self, token: str | None) -> None:
        self._token = token

    def clear_token(self) -> None:
        self._token = None

    def has_token(self) -> bool:
        return self._token is not None

    def request_config(self) -> RequestConfig:
        return RequestConfig(
            base_url=self._base_url,
            content_type=self._content_type,
            logging_enabled=self._logging_enabled,
            tag=self._tag,
            auth=self._auth,
            token=self._token,
        )

    def generate_headers(self, method: HttpMethod, body: Any | None = None) -> Headers:
        """
        Return the authentication headers a request with this method and body would carry.

        The body is serialized first, as a request would send it; `BodyEncodingError`
        propagates.
        """
        payload = self.executor.serializer.encode(body) if body is not None else None
        return auth_headers(self.request_config(), HttpMethod(method), payload)

    # token persistence

    def store_token(self, token: str | None = None, key: str | None = None) -> None:
        """
        Persist a token under `key` (``settings.token_key`` by default).

        Stores `token` if given, else the current token; with neither, the stored
        entry is deleted.
        """
        key = key or self.settings.token_key
        value = token if token is not None else self._token
        if value is not None:
            self.storage.set(key, value)
        else:
            self.storage.delete(key)

    def load_token(self, key: str | None = None) -> None:
        """Make the token stored under `key` (``settings.token_key`` by default) current; a missing entry is ignored."""
        token = self.storage.get(key or self.settings.token_key)
        if token is None:
            return
        self._token = token

    # verbs

    async def get(
        self,
        endpoint: EndpointInterface,
        response_type: type[T],
        *,
        headers: Headers | None = None,
        timeout: float | None = None,
    ) -> Result[T]:
        return await self._request(endpoint, HttpMethod.GET, response_type, None, headers, timeout)

    async def post(
        self,
        endpoint: EndpointInterface,
        response_type: type[T],
        body: Any | None,
        *,
        headers: Headers | None = None,
        timeout: float | None = None,
    ) -> Result[T]:
        return await self._request(endpoint, HttpMethod.POST, response_type, body, headers, timeout)

    async def put(
        self,
        endpoint: EndpointInterface,
        response_type: type[T],
        body: Any | None,
        *,
        headers: Headers | None = None,
        timeout: float | None = None,
    ) -> Result[T]:
        return await self._request(endpoint, HttpMethod.PUT, response_type, body, headers, timeout)

    async def patch(
        self,
        endpoint: EndpointInterface,
        response_type: type[T],
        body: Any | None,
        *,
        headers: Headers | None = None,
        timeout: float | None = None,
    ) -> Result[T]:
        return await self._request(endpoint, HttpMethod.PATCH, response_type, body, headers, timeout)

    async def delete(
        self,
        endpoint: EndpointInterface,
        response_type: type[T],
        *,
        headers: Headers | None = None,
        timeout: float | None = None,
    ) -> Result[T]:
        return await self._request(endpoint, HttpMethod.DELETE, response_type, None, headers, timeout)

    async def _request(
        self,
        endpoint: EndpointInterface,
        method: HttpMethod,
        response_type: type[T],
        body: Any | None,
        headers: Headers | None,
        timeout: float | None,
    ) -> Result[T]:
        return await self.executor.execute(
            self.request_config(),
            endpoint,
            method,
            response_type=response_type,
            body=body,
            headers=headers,
            timeout=timeout,
        )

    async def aclose(self) -> None:
        if not self._owns_transport:
            return
        with suppress(Exception):
            await self.transport.aclose()

    async def __aenter__(self) -> SwiftlyRest:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


def create_default_client(settings: RestSettings | None = None, **overrides: Any) -> SwiftlyRest:
    """Convenience factory for an environment-configured client."""
    return SwiftlyRest.from_settings(settings, **overrides)


__all__ = ["SwiftlyRest", "create_default_client"]
