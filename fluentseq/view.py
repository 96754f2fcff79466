# Copyright (c) 2025-2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Generic, TypeVar, overload

if TYPE_CHECKING:
    from .collection import Collection

T = TypeVar("T")

__all__ = ("CollectionView",)


class CollectionView(Sequence[T], Generic[T]):
    """Read-only window ``[start, stop)`` over a collection's storage.

    Nothing is copied: the view reads the parent's live elements, so pushes,
    sorts or pops on the parent show through. Bounds are clamped on every
    access the same way ``Collection.slice`` clamps them. Use
    ``to_collection`` for an independent snapshot.
    """

    __slots__ = ("_data", "_start", "_stop")

    def __init__(self, data: list[T], start: int, stop: int):
        self._data = data
        self._start = max(start, 0)
        self._stop = max(stop, self._start)

    def _bounds(self) -> tuple[int, int]:
        stop = min(self._stop, len(self._data))
        return self._start, max(stop, self._start)

    def __len__(self) -> int:
        start, stop = self._bounds()
        return stop - start

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index: int | slice) -> T | list[T]:
        start, stop = self._bounds()
        window = range(start, stop)
        if isinstance(index, slice):
            return [self._data[i] for i in window[index]]
        return self._data[window[index]]

    def __iter__(self) -> Iterator[T]:
        start, stop = self._bounds()
        for i in range(start, stop):
            yield self._data[i]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CollectionView):
            return list(self) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"CollectionView({list(self)!r})"

    def to_list(self) -> list[T]:
        return list(self)

    def to_collection(self) -> Collection[T]:
        """Copy the visible elements into a new, independent collection."""
        from .collection import Collection

        return Collection.from_iterable(self)
