# Copyright (c) 2025-2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Singleton sentinels used as the collection's not-found signal."""

from __future__ import annotations

from typing import Any, Final, Literal

__all__ = (
    "Undefined",
    "UndefinedType",
    "Unset",
    "UnsetType",
    "is_sentinel",
    "not_sentinel",
)


class _SingletonMeta(type):
    """One instance per sentinel class."""

    _cache: dict[type, Any] = {}

    def __call__(cls, *a, **kw):
        if cls not in cls._cache:
            cls._cache[cls] = super().__call__(*a, **kw)
        return cls._cache[cls]


class _Sentinel(metaclass=_SingletonMeta):
    __slots__: tuple[str, ...] = ()

    def __deepcopy__(self, memo):
        return self

    def __copy__(self):
        return self

    def __bool__(self) -> Literal[False]:
        return False


class UndefinedType(_Sentinel):
    """Returned when a lookup finds nothing.

    Never equal to any element, so it cannot be confused with a stored
    ``None``, ``0`` or ``""``.

    Example:
        >>> Collection().pop() is Undefined
        True
    """

    __slots__ = ()

    def __repr__(self) -> Literal["Undefined"]:
        return "Undefined"

    def __reduce__(self):
        return "Undefined"


class UnsetType(_Sentinel):
    """Marks an optional parameter that was not provided."""

    __slots__ = ()

    def __repr__(self) -> Literal["Unset"]:
        return "Unset"

    def __reduce__(self):
        return "Unset"


Undefined: Final = UndefinedType()
"""Nothing was found."""
Unset: Final = UnsetType()
"""A parameter was not given."""


def is_sentinel(value: Any) -> bool:
    return isinstance(value, (UndefinedType, UnsetType))


def not_sentinel(value: Any) -> bool:
    return not is_sentinel(value)
