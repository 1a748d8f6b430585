# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Secure token storage backends."""

from __future__ import annotations

from typing import Protocol

import keyring
from keyring.errors import PasswordDeleteError


class SecureStorage(Protocol):
    """Key/value store for credentials; implementations are expected to be thread-safe."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class KeyringStorage(SecureStorage):
    """Platform keychain storage through the `keyring` backends."""

    def __init__(self, service: str = "swiftlyrest"):
        self.service = service

    def get(self, key: str) -> str | None:
        return keyring.get_password(self.service, key)

    def set(self, key: str, value: str) -> None:
        keyring.set_password(self.service, key, value)

    def delete(self, key: str) -> None:
        try:
            keyring.delete_password(self.service, key)
        except PasswordDeleteError:
            # nothing stored under this key
            return


class MemoryStorage(SecureStorage):
    """Process-local storage for tests and ephemeral clients."""

    def __init__(self, values: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(values or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


__all__ = ["KeyringStorage", "MemoryStorage", "SecureStorage"]
