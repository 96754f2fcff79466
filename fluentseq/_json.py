# Copyright (c) 2025-2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""JSON boundary for collections, built on orjson.

orjson encodes dataclasses, enums, datetimes and UUIDs natively; the
``_default`` hook adds pydantic models, msgspec structs, sets and any other
``Sequence`` (nested collections and views). Anything else, callables in
particular, is rejected.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import msgspec
import orjson
from pydantic import BaseModel

from ._errors import SerializationError
from .settings import settings

__all__ = ("json_dumpb", "json_dumps", "json_loads")

logger = logging.getLogger(__name__)


def _default(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, msgspec.Struct):
        return msgspec.to_builtins(obj)
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    if isinstance(obj, Sequence) and not isinstance(
        obj, (str, bytes, bytearray)
    ):
        return list(obj)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def _options(indent: bool, sort_keys: bool | None) -> int:
    opt = 0
    if indent:
        opt |= orjson.OPT_INDENT_2
    if settings.json_sort_keys if sort_keys is None else sort_keys:
        opt |= orjson.OPT_SORT_KEYS
    return opt


def json_dumpb(
    value: Any, *, indent: bool = False, sort_keys: bool | None = None
) -> bytes:
    """Encode ``value`` to JSON bytes.

    Raises:
        SerializationError: If any nested value is not structurally encodable.
    """
    try:
        return orjson.dumps(
            value, default=_default, option=_options(indent, sort_keys)
        )
    except orjson.JSONEncodeError as e:
        logger.debug("JSON encoding failed: %s", e)
        raise SerializationError(
            f"Value is not JSON serializable: {e}", cause=e
        ) from e


def json_dumps(
    value: Any, *, indent: bool = False, sort_keys: bool | None = None
) -> str:
    return json_dumpb(value, indent=indent, sort_keys=sort_keys).decode(
        "utf-8"
    )


def json_loads(data: str | bytes | bytearray | memoryview) -> Any:
    try:
        return orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise SerializationError(f"Invalid JSON: {e}", cause=e) from e
