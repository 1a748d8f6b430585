# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Endpoint URL builder.

An `Endpoint` accumulates a relative URL fragment through chainable calls and
only validates it when `build()` is called:

    Endpoint().with_version("v1").with_controller("users").with_path("{id}", {"id": "42"})

Values are inserted verbatim. Nothing is percent-encoded, so segment and query
values must already be URL-safe; escaping is the caller's responsibility.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Protocol, Union

from .errors import InvalidURL
from .http.url import is_valid_reference


class StringRepresentable(Protocol):
    """Symbolic value with a string form, typically a ``str``-valued Enum member."""

    @property
    def value(self) -> str: ...


Fragment = Union[str, StringRepresentable]


def as_string(fragment: Fragment) -> str:
    if isinstance(fragment, str) and not isinstance(fragment, Enum):
        return fragment
    value = getattr(fragment, "value", None)
    if value is None:
        raise TypeError(f"Expected a string or string-valued enum, got {type(fragment).__name__}")
    return str(value)


class EndpointInterface(Protocol):
    """What the executor needs from an endpoint: its raw URL and a validating build step."""

    @property
    def url(self) -> str: ...

    def build(self) -> str: ...


class Endpoint(EndpointInterface):
    def __init__(self, url: str = ""):
        self._url = url

    @property
    def url(self) -> str:
        return self._url

    def __repr__(self) -> str:
        return f"Endpoint({self._url!r})"

    def _append(self, fragment: Fragment) -> Endpoint:
        self._url += f"/{as_string(fragment)}"
        return self

    def with_version(self, version: Fragment) -> Endpoint:
        """Append ``/<version>``. Do not include the leading or trailing slash."""
        return self._append(version)

    def with_controller(self, controller: Fragment) -> Endpoint:
        """Append ``/<controller>``. Do not include the leading or trailing slash."""
        return self._append(controller)

    def with_path(self, path: Fragment, parameters: Mapping[str, object] | None = None) -> Endpoint:
        """
        Append ``/<path>`` and fill ``{key}`` placeholders from `parameters`.

        Substitution runs over the whole accumulated URL, so a placeholder added by
        an earlier call is filled as well.
        """
        self._append(path)
        for key, value in (parameters or {}).items():
            self._url = self._url.replace(f"{{{key}}}", str(value))
        return self

    def with_query(self, query: Mapping[str, object]) -> Endpoint:
        """
        Append ``?k1=v1&k2=v2`` in the mapping's iteration order.

        Call at most once, after every path segment: a second call appends another
        ``?...`` and leaves the URL malformed.
        """
        self._url += "?" + "&".join(f"{key}={value}" for key, value in query.items())
        return self

    def build(self) -> str:
        """Return the accumulated URL, or raise `InvalidURL` when it does not parse."""
        if not is_valid_reference(self._url):
            raise InvalidURL(self._url)
        return self._url


__all__ = ["Endpoint", "EndpointInterface", "Fragment", "StringRepresentable", "as_string"]
