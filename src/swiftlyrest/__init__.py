# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
SwiftlyRest package entrypoint.

A small async REST client: build an endpoint fragment, call a verb on a
`SwiftlyRest` client, and receive a `Success` or a `Failure` carrying one of a
closed set of typed errors. Transport, serialization, authentication and token
storage are injectable.
"""

from .auth import ApiAuthentication, AuthProvider
from .client import SwiftlyRest, create_default_client
from .config import RestSettings, load_settings
from .endpoint import Endpoint, EndpointInterface, StringRepresentable
from .errors import (
    BadGateway,
    BadRequest,
    BadRequestBody,
    ErrorKind,
    Forbidden,
    GatewayTimeout,
    InternalServerError,
    InvalidURL,
    NoResponse,
    NotFound,
    RetryableCode,
    ServiceUnavailable,
    SwiftlyRestError,
    Timeout,
    Unauthorized,
    UnexpectedResponseFormat,
    UnknownStatus,
)
from .executor import RequestConfig, RequestExecutor
from .http import (
    HttpMethod,
    HttpRequest,
    HttpResponse,
    HttpxTransport,
    StubTransport,
    Transport,
    create_default_transport,
)
from .log import setup_logging
from .result import Failure, Result, Success
from .serialization import JsonSerializer, Serializer
from .storage import KeyringStorage, MemoryStorage, SecureStorage
from .version import __version__

__all__ = [
    "ApiAuthentication",
    "AuthProvider",
    "BadGateway",
    "BadRequest",
    "BadRequestBody",
    "Endpoint",
    "EndpointInterface",
    "ErrorKind",
    "Failure",
    "Forbidden",
    "GatewayTimeout",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "HttpxTransport",
    "InternalServerError",
    "InvalidURL",
    "JsonSerializer",
    "KeyringStorage",
    "MemoryStorage",
    "NoResponse",
    "NotFound",
    "RequestConfig",
    "RequestExecutor",
    "RestSettings",
    "Result",
    "RetryableCode",
    "SecureStorage",
    "Serializer",
    "ServiceUnavailable",
    "StringRepresentable",
    "StubTransport",
    "Success",
    "SwiftlyRest",
    "SwiftlyRestError",
    "Timeout",
    "Transport",
    "Unauthorized",
    "UnexpectedResponseFormat",
    "UnknownStatus",
    "create_default_client",
    "create_default_transport",
    "load_settings",
    "setup_logging",
    "__version__",
]
