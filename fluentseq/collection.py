# Copyright (c) 2025-2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import random as _random
from collections.abc import Callable, Iterable, Iterator, Sequence
from functools import cmp_to_key
from typing import Any, Generic, TypeVar, overload

from ._errors import SerializationError, ValidationError
from ._json import json_dumpb, json_dumps, json_loads
from ._rng import get_rng
from ._sentinel import Undefined, Unset
from .batch import process_batches, run_batches
from .view import CollectionView

T = TypeVar("T")
D = TypeVar("D")
A = TypeVar("A")

__all__ = ("Collection",)


def _zero_value(item: Any) -> Any:
    try:
        return type(item)()
    except (TypeError, ValueError):
        return None


class Collection(Sequence[T], Generic[T]):
    """An ordered, mutable sequence with chainable operations.

    Lookups that can miss (``at``, ``pop``, ``shift``, ``find``, ``random``)
    return the ``Undefined`` sentinel, or ``default`` when given, instead of
    raising. Search operations compare by value (``==``), never identity.

    ``filter``, ``map``, ``slice``, ``copy`` and batch results are new
    collections; every other mutating operation works in place and, where
    it has nothing else to report, returns ``self`` for chaining.

    Not thread-safe: concurrent mutation without external locking is a
    caller error.
    """

    __slots__ = ("_items", "_rng")

    def __init__(self, *items: T, rng: _random.Random | None = None):
        self._items: list[T] = list(items)
        self._rng = rng

    @classmethod
    def from_iterable(
        cls, iterable: Iterable[T], /, *, rng: _random.Random | None = None
    ) -> Collection[T]:
        return cls(*iterable, rng=rng)

    def _derive(self, items: Iterable[Any]) -> Collection[Any]:
        return type(self).from_iterable(items, rng=self._rng)

    @property
    def rng(self) -> _random.Random:
        return self._rng if self._rng is not None else get_rng()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __contains__(self, item: object) -> bool:
        return self.contains(item)  # type: ignore[arg-type]

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> Collection[T]: ...

    def __getitem__(self, index: int | slice) -> T | Collection[T]:
        """List-style access. Unlike ``at``, raises ``IndexError``."""
        if isinstance(index, slice):
            return self._derive(self._items[index])
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Collection):
            return self._items == other._items
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    def __copy__(self) -> Collection[T]:
        return self.copy()

    @property
    def items(self) -> list[T]:
        """A list copy of the elements, in order."""
        return self._items[:]

    def to_list(self) -> list[T]:
        return self._items[:]

    def copy(self) -> Collection[T]:
        """Shallow copy; elements are shared, storage is not."""
        return self._derive(self._items)

    def length(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def empty(self) -> Collection[T]:
        """Remove every element. ( Chainable )"""
        self._items.clear()
        return self

    def push(self, *items: T) -> int:
        """Append one or more items, returning the new length."""
        self._items.extend(items)
        return len(self._items)

    def pop(self, default: D = Undefined) -> T | D:
        """Remove and return the last item, or ``default`` when empty."""
        if not self._items:
            return default
        return self._items.pop()

    def shift(self, default: D = Undefined) -> T | D:
        """Remove and return the first item, or ``default`` when empty."""
        if not self._items:
            return default
        return self._items.pop(0)

    def unshift(self, item: T) -> int:
        """Prepend one item, returning the new length."""
        self._items.insert(0, item)
        return len(self._items)

    def push_distinct(self, *items: T) -> int:
        """Append each item not already present, returning the new length.

        Each item is checked against the collection as it stands at its own
        insertion, so repeats inside ``items`` are also dropped.
        """
        for item in items:
            if not self.contains(item):
                self._items.append(item)
        return len(self._items)

    def concat(self, items: Iterable[T]) -> Collection[T]:
        """Append every element of ``items``. ( Chainable )"""
        self._items.extend(list(items))
        return self

    def at(self, index: int, default: D = Undefined) -> T | D:
        """Item at ``index``; negative or out-of-range indices miss."""
        if 0 <= index < len(self._items):
            return self._items[index]
        return default

    def at_first(self, default: D = Undefined) -> T | D:
        return self.at(0, default)

    def at_last(self, default: D = Undefined) -> T | D:
        return self.at(len(self._items) - 1, default)

    def insert_at(self, item: T, index: int) -> Collection[T]:
        """Insert ``item`` so that it occupies ``index``. ( Chainable )

        ``index <= 0`` prepends. ``index >= length - 1`` appends, which means
        targeting the last position places the item after the current last
        element rather than before it.
        """
        if index <= 0:
            self.unshift(item)
        elif index >= len(self._items) - 1:
            self.push(item)
        else:
            self._items.insert(index, item)
        return self

    def insert_before(self, item: T, index: int) -> Collection[T]:
        return self.insert_at(item, index - 1)

    def insert_after(self, item: T, index: int) -> Collection[T]:
        return self.insert_at(item, index + 1)

    def random_index(self) -> int:
        """Uniform index in ``[0, length)``, or -1 when empty."""
        if not self._items:
            return -1
        return self.rng.randrange(len(self._items))

    def random(self, default: D = Undefined) -> T | D:
        if not self._items:
            return default
        return self.at(self.rng.randrange(len(self._items)), default)

    def contains(self, item: T) -> bool:
        return any(inner == item for inner in self._items)

    def contains_by(self, predicate: Callable[[int, T], bool]) -> bool:
        return self.find_index(predicate) != -1

    def count(self, item: T) -> int:
        return sum(1 for inner in self._items if inner == item)

    def count_by(self, predicate: Callable[[T], bool]) -> int:
        return sum(1 for inner in self._items if predicate(inner))

    def find(
        self, predicate: Callable[[int, T], bool], default: D = Undefined
    ) -> T | D:
        """First item matching ``predicate(index, item)``, else ``default``."""
        for i, item in enumerate(self._items):
            if predicate(i, item):
                return item
        return default

    def find_index(self, predicate: Callable[[int, T], bool]) -> int:
        for i, item in enumerate(self._items):
            if predicate(i, item):
                return i
        return -1

    def last_index_of(self, item: T) -> int:
        index = -1
        for i, inner in enumerate(self._items):
            if inner == item:
                index = i
        return index

    def some(self, predicate: Callable[[int, T], bool]) -> bool:
        return any(predicate(i, item) for i, item in enumerate(self._items))

    def none(self, predicate: Callable[[int, T], bool]) -> bool:
        return not self.some(predicate)

    def all(self, predicate: Callable[[int, T], bool]) -> bool:
        return all(predicate(i, item) for i, item in enumerate(self._items))

    def map(self, func: Callable[[int, T], A]) -> Collection[A]:
        """New collection of ``func(index, item)`` results, in order."""
        return self._derive(
            func(i, item) for i, item in enumerate(self._items)
        )

    def filter(self, predicate: Callable[[T], bool]) -> Collection[T]:
        """New collection of the items passing ``predicate``, in order."""
        return self._derive(item for item in self._items if predicate(item))

    def each(self, func: Callable[[int, T], Any]) -> Collection[T]:
        """Call ``func(index, item)`` in order. ( Chainable )

        A truthy return from ``func`` stops the iteration.
        """
        for i, item in enumerate(self._items):
            if func(i, item):
                break
        return self

    def reduce(
        self,
        func: Callable[[int, T, A], A],
        initial: A | Any = Unset,
    ) -> A:
        """Left fold of ``func(index, item, accumulator)``.

        Without ``initial`` the accumulator starts at the element type's
        zero value (``type(first)()``: ``0``, ``""``, ``[]``), or None when
        that is not constructible or the collection is empty.
        """
        if initial is Unset:
            initial = _zero_value(self._items[0]) if self._items else None
        acc = initial
        for i, item in enumerate(self._items):
            acc = func(i, item, acc)
        return acc

    def slice(self, start: int, stop: int) -> Collection[T]:
        """Independent copy of ``[start, stop)``.

        Bounds clamp: ``stop`` past the end stops at the end, ``start``
        past ``stop`` gives an empty collection, negatives count as 0.
        """
        start, stop = self._clamp(start, stop)
        return self._derive(self._items[start:stop])

    def view(self, start: int, stop: int) -> CollectionView[T]:
        """Read-only, zero-copy window over ``[start, stop)``."""
        start, stop = self._clamp(start, stop)
        return CollectionView(self._items, start, stop)

    def _clamp(self, start: int, stop: int) -> tuple[int, int]:
        stop = min(max(stop, 0), len(self._items))
        start = min(max(start, 0), stop)
        return start, stop

    def reverse(self) -> Collection[T]:
        """Reverse in place. ( Chainable )"""
        self._items.reverse()
        return self

    def sort(
        self,
        less: Callable[[int, int], bool] | None = None,
        *,
        key: Callable[[T], Any] | None = None,
        reverse: bool = False,
    ) -> Collection[T]:
        """Stable in-place sort. ( Chainable )

        ``less(i, j)`` compares positions of the collection as it was when
        ``sort`` was called, so it may read items back through ``at``.
        ``key`` works as for ``list.sort``. With neither, items are compared
        directly.

        Raises:
            ValidationError: If both ``less`` and ``key`` are given.
        """
        if less is not None and key is not None:
            raise ValidationError("sort() takes either less or key, not both")

        if less is None:
            self._items.sort(key=key, reverse=reverse)
            return self

        def _cmp(i: int, j: int) -> int:
            if less(i, j):
                return -1
            if less(j, i):
                return 1
            return 0

        order = sorted(
            range(len(self._items)), key=cmp_to_key(_cmp), reverse=reverse
        )
        # the storage list is kept so views stay attached
        self._items[:] = [self._items[i] for i in order]
        return self

    def to_json(
        self, *, indent: bool = False, sort_keys: bool | None = None
    ) -> str:
        """Encode the elements as an ordered JSON array.

        Raises:
            SerializationError: If an element is not structurally encodable.
        """
        return json_dumps(self._items, indent=indent, sort_keys=sort_keys)

    def to_bytes(
        self, *, indent: bool = False, sort_keys: bool | None = None
    ) -> bytes:
        return json_dumpb(self._items, indent=indent, sort_keys=sort_keys)

    @classmethod
    def from_json(
        cls,
        data: str | bytes | bytearray,
        /,
        *,
        rng: _random.Random | None = None,
    ) -> Collection[Any]:
        """Build a collection from a JSON array.

        Raises:
            SerializationError: If ``data`` is not valid JSON or not an array.
        """
        value = json_loads(data)
        if not isinstance(value, list):
            raise SerializationError(
                "Expected a JSON array",
                details={"type": type(value).__name__},
            )
        return cls.from_iterable(value, rng=rng)

    async def abatch(
        self,
        func: Callable[[int, int, T], Any],
        batch_size: int | None = None,
        *,
        fail_fast: bool = False,
        return_exceptions: bool = False,
        timeout: float | None = None,
    ) -> Collection[Any]:
        """Run ``func(batch_index, job_index, item)`` over sequential batches.

        Jobs of one batch run concurrently; a batch starts only after every
        job of the previous one finished. See ``process_batches`` for the
        failure policies.

        Returns:
            A new collection of ``func`` results in item order.

        Raises:
            BatchError: A batch had failures (unless ``return_exceptions``).
        """
        results = await process_batches(
            self._items[:],
            func,
            batch_size,
            fail_fast=fail_fast,
            return_exceptions=return_exceptions,
            timeout=timeout,
        )
        return self._derive(results)

    def batch(
        self,
        func: Callable[[int, int, T], Any],
        batch_size: int | None = None,
        *,
        fail_fast: bool = False,
        return_exceptions: bool = False,
        timeout: float | None = None,
    ) -> Collection[Any]:
        """Blocking ``abatch``; not callable from a running event loop."""
        results = run_batches(
            self._items[:],
            func,
            batch_size,
            fail_fast=fail_fast,
            return_exceptions=return_exceptions,
            timeout=timeout,
        )
        return self._derive(results)
