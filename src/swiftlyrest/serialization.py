# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""JSON encode/decode of request bodies and response payloads."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Protocol, TypeVar

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

T = TypeVar("T")


class BodyEncodingError(Exception):
    """A request body could not be serialized."""


class ResponseDecodingError(Exception):
    """A response payload did not match the requested type."""


class Serializer(Protocol):
    def encode(self, value: Any) -> bytes: ...

    def decode(self, data: bytes, response_type: type[T]) -> T: ...


@lru_cache(maxsize=256)
def _adapter(tp: Any) -> TypeAdapter[Any]:
    return TypeAdapter(tp)


def _adapter_for(tp: Any) -> TypeAdapter[Any]:
    try:
        return _adapter(tp)
    except TypeError:
        # unhashable type expressions skip the cache
        return TypeAdapter(tp)


class JsonSerializer(Serializer):
    """
    pydantic-backed JSON serializer.

    Accepts anything pydantic can describe: models, dataclasses, TypedDicts,
    builtins and parametrized generics such as ``list[User]``.
    """

    def encode(self, value: Any) -> bytes:
        try:
            return _adapter_for(type(value)).dump_json(value)
        except (PydanticSchemaGenerationError, PydanticSerializationError, TypeError, ValueError) as exc:
            raise BodyEncodingError(str(exc)) from exc

    def decode(self, data: bytes, response_type: type[T]) -> T:
        try:
            return _adapter_for(response_type).validate_json(data)
        except (PydanticSchemaGenerationError, ValidationError, TypeError, ValueError) as exc:
            raise ResponseDecodingError(str(exc)) from exc


__all__ = ["BodyEncodingError", "JsonSerializer", "ResponseDecodingError", "Serializer"]
