# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for SwiftlyRest."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

DEFAULT_LOG_LEVEL = "WARNING"

logger = logging.getLogger("swiftlyrest.requests")


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging; `SWIFTLYREST_LOG_LEVEL` is read at call time."""
    effective_level = (level or os.getenv("SWIFTLYREST_LOG_LEVEL", DEFAULT_LOG_LEVEL)).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


class RequestLog:
    """
    Tagged request log channel toggled by the client's logging flag.

    Every line is prefixed with the client tag and a bracketed event name, e.g.
    ``[SwiftlyRest][requestURL] Request URL: https://api.example.com/v1/users``.
    Nothing is written while disabled.
    """

    def __init__(self, tag: str, enabled: bool = False):
        self.tag = tag
        self.enabled = enabled

    def write(self, event: str, message: str, *args: object) -> None:
        if not self.enabled:
            return
        logger.info("%s[%s] " + message, self.tag, event, *args)

    def request_url(self, url: str) -> None:
        self.write("requestURL", "Request URL: %s", url)

    def request_headers(self, headers: Mapping[str, str]) -> None:
        for key, value in headers.items():
            self.write("requestHeader", "%s: %s", key, value)

    def request_body(self, body: bytes) -> None:
        self.write("requestBody", "%s", body.decode("utf-8", errors="replace"))

    def response(self, text: str) -> None:
        self.write("response", "Server Response: %s", text)


__all__ = ["RequestLog", "setup_logging"]
