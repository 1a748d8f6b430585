# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport exports."""

from .adapters import StubTransport
from .client import Transport, create_default_transport
from .headers import AUTHORIZATION, CONTENT_TYPE, bearer, merge_headers
from .httpx_client import HttpxTransport
from .models import Headers, HttpMethod, HttpRequest, HttpResponse
from .url import is_absolute_url, is_valid_reference, resolve_url

__all__ = [
    "AUTHORIZATION",
    "CONTENT_TYPE",
    "Headers",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "HttpxTransport",
    "StubTransport",
    "Transport",
    "bearer",
    "create_default_transport",
    "is_absolute_url",
    "is_valid_reference",
    "merge_headers",
    "resolve_url",
]
