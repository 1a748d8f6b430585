# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and status classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import ClassVar

from .http.models import Headers


class ErrorKind(str, Enum):
    INVALID_URL = "INVALID_URL"
    NO_RESPONSE = "NO_RESPONSE"
    BAD_REQUEST_BODY = "BAD_REQUEST_BODY"
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    TIMEOUT = "TIMEOUT"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    BAD_GATEWAY = "BAD_GATEWAY"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    GATEWAY_TIMEOUT = "GATEWAY_TIMEOUT"
    UNEXPECTED_RESPONSE_FORMAT = "UNEXPECTED_RESPONSE_FORMAT"
    UNKNOWN_STATUS = "UNKNOWN_STATUS"


@dataclass(eq=False)
class SwiftlyRestError(Exception):
    """
    Base class of every failure a verb call can return.

    Each instance keeps the exchange that produced it: the resolved request URL,
    the headers actually sent, the serialized request body and, for failures
    reported by the server, the raw response text.
    """

    kind: ClassVar[ErrorKind]

    url: str | None = None
    headers: Headers = field(default_factory=dict)
    body: bytes | None = None
    response: str | None = None
    status_code: int | None = None
    reason: str | None = None

    def __str__(self) -> str:
        parts = [self.kind.value]
        if self.status_code is not None:
            parts.append(str(self.status_code))
        if self.url:
            parts.append(self.url)
        if self.reason:
            parts.append(self.reason)
        return " ".join(parts)


class InvalidURL(SwiftlyRestError):
    kind = ErrorKind.INVALID_URL


class NoResponse(SwiftlyRestError):
    kind = ErrorKind.NO_RESPONSE


class BadRequestBody(SwiftlyRestError):
    kind = ErrorKind.BAD_REQUEST_BODY


class BadRequest(SwiftlyRestError):
    kind = ErrorKind.BAD_REQUEST


class Unauthorized(SwiftlyRestError):
    kind = ErrorKind.UNAUTHORIZED


class Forbidden(SwiftlyRestError):
    kind = ErrorKind.FORBIDDEN


class NotFound(SwiftlyRestError):
    kind = ErrorKind.NOT_FOUND


class Timeout(SwiftlyRestError):
    kind = ErrorKind.TIMEOUT


class InternalServerError(SwiftlyRestError):
    kind = ErrorKind.INTERNAL_SERVER_ERROR


class BadGateway(SwiftlyRestError):
    kind = ErrorKind.BAD_GATEWAY


class ServiceUnavailable(SwiftlyRestError):
    kind = ErrorKind.SERVICE_UNAVAILABLE


class GatewayTimeout(SwiftlyRestError):
    kind = ErrorKind.GATEWAY_TIMEOUT


class UnexpectedResponseFormat(SwiftlyRestError):
    kind = ErrorKind.UNEXPECTED_RESPONSE_FORMAT


class UnknownStatus(SwiftlyRestError):
    kind = ErrorKind.UNKNOWN_STATUS


STATUS_ERRORS: dict[int, type[SwiftlyRestError]] = {
    400: BadRequest,
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    408: Timeout,
    500: InternalServerError,
    502: BadGateway,
    503: ServiceUnavailable,
    504: GatewayTimeout,
}


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code <= 299


def error_for_status(
    status_code: int,
    *,
    url: str | None,
    headers: Headers,
    body: bytes | None,
    response: str,
) -> SwiftlyRestError:
    """Map a non-2xx status code to its error variant; unlisted codes become UnknownStatus."""
    error_cls = STATUS_ERRORS.get(status_code, UnknownStatus)
    return error_cls(
        url=url,
        headers=dict(headers),
        body=body,
        response=response,
        status_code=status_code,
    )


class RetryableCode(IntEnum):
    """
    Status codes a caller may choose to retry on.

    Purely descriptive: the client itself never retries.
    """

    INTERNAL_SERVER_ERROR = 500
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    TIMEOUT = 504
    UNKNOWN = 999

    @classmethod
    def for_error(cls, error: SwiftlyRestError) -> RetryableCode | None:
        if isinstance(error, UnknownStatus):
            return cls.UNKNOWN
        if error.status_code is None:
            return None
        try:
            return cls(error.status_code)
        except ValueError:
            return None


__all__ = [
    "BadGateway",
    "BadRequest",
    "BadRequestBody",
    "ErrorKind",
    "Forbidden",
    "GatewayTimeout",
    "InternalServerError",
    "InvalidURL",
    "NoResponse",
    "NotFound",
    "RetryableCode",
    "STATUS_ERRORS",
    "ServiceUnavailable",
    "SwiftlyRestError",
    "Timeout",
    "Unauthorized",
    "UnexpectedResponseFormat",
    "UnknownStatus",
    "error_for_status",
    "is_success_status",
]
