# Copyright (c) 2025-2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Sequential batches of concurrent jobs.

Primary exports:
    process_batches: Apply a function to every item, one batch at a time.
    run_batches: Synchronous entry point running ``process_batches`` on an
        anyio event loop.
    JobFailure: One failed job, as reported by ``BatchError``.

Items are split into ``ceil(len / batch_size)`` batches. Every job of a batch
starts concurrently and the batch barrier waits for all of them before the
next batch is dispatched. Sync callables run on worker threads, coroutine
functions run as tasks. Nothing beyond the barrier synchronizes the jobs.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from functools import partial
from typing import Any, TypeVar

import anyio

from ._errors import BatchError, ValidationError
from .concurrency import (
    CapacityLimiter,
    checkpoint,
    create_task_group,
    get_cancelled_exc_class,
    run_with_timeout,
)
from .settings import settings

T = TypeVar("T")
R = TypeVar("R")

__all__ = (
    "JobFailure",
    "partition",
    "process_batches",
    "resolve_batch_size",
    "run_batches",
)

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class JobFailure:
    batch_index: int
    job_index: int
    index: int
    """Position of the item in the whole input."""
    item: Any
    exception: Exception


def resolve_batch_size(length: int, batch_size: int | None) -> int:
    """Validate ``batch_size`` and clamp it to ``length``.

    Raises:
        ValidationError: If ``batch_size`` is not an integer >= 1.
    """
    if batch_size is None:
        batch_size = settings.default_batch_size
    if isinstance(batch_size, bool) or not isinstance(batch_size, int):
        raise ValidationError.from_value(batch_size, expected="int >= 1")
    if batch_size < 1:
        raise ValidationError.from_value(
            batch_size,
            expected="int >= 1",
            message=f"batch_size must be >= 1, got {batch_size}",
        )
    if 0 < length < batch_size:
        return length
    return batch_size


def partition(items: Sequence[T], batch_size: int) -> list[list[T]]:
    """Split ``items`` into consecutive chunks of at most ``batch_size``."""
    size = resolve_batch_size(len(items), batch_size)
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


async def _run_batch(
    func: Callable[..., Any],
    batch_index: int,
    batch: list[Any],
    offset: int,
    out: list[Any],
    *,
    fail_fast: bool,
    timeout: float | None,
) -> list[JobFailure]:
    failures: list[JobFailure] = []
    limiter = CapacityLimiter(len(batch))

    async with create_task_group() as tg:

        async def _job(job_index: int, item: Any) -> None:
            try:
                out[offset + job_index] = await run_with_timeout(
                    func,
                    batch_index,
                    job_index,
                    item,
                    timeout=timeout,
                    limiter=limiter,
                )
            except get_cancelled_exc_class():
                raise
            except Exception as exc:
                out[offset + job_index] = exc
                failures.append(
                    JobFailure(
                        batch_index=batch_index,
                        job_index=job_index,
                        index=offset + job_index,
                        item=item,
                        exception=exc,
                    )
                )
                if fail_fast:
                    tg.cancel()

        for job_index, item in enumerate(batch):
            tg.start_soon(_job, job_index, item)

    return failures


async def process_batches(
    items: Iterable[T],
    func: Callable[[int, int, T], R],
    /,
    batch_size: int | None = None,
    *,
    fail_fast: bool = False,
    return_exceptions: bool = False,
    timeout: float | None = None,
) -> list[R | Exception]:
    """Apply ``func(batch_index, job_index, item)`` to every item.

    Args:
        items: Items to process.
        func: Sync or async callable. ``job_index`` is the position inside
            the batch.
        batch_size: Jobs per batch, clamped to the number of items. None
            uses ``settings.default_batch_size``.
        fail_fast: Cancel the rest of a batch at its first failure.
        return_exceptions: Store failures in the result and keep going
            instead of raising.
        timeout: Per-job deadline in seconds.

    Returns:
        ``func`` results in input order. May include exceptions if
        ``return_exceptions=True``.

    Raises:
        BatchError: A batch had failed jobs. Later batches are not started.
        ValidationError: Invalid ``func``, ``batch_size`` or option mix.
    """
    if not callable(func):
        raise ValidationError.from_value(func, expected="callable")
    if fail_fast and return_exceptions:
        raise ValidationError(
            "fail_fast and return_exceptions are mutually exclusive"
        )

    items = list(items)
    size = resolve_batch_size(len(items), batch_size)
    out: list[Any] = [None] * len(items)

    for batch_index, batch in enumerate(partition(items, size)):
        await checkpoint()
        offset = batch_index * size
        logger.debug(
            "Dispatching batch %d (%d jobs, offset %d)",
            batch_index,
            len(batch),
            offset,
        )
        failures = await _run_batch(
            func,
            batch_index,
            batch,
            offset,
            out,
            fail_fast=fail_fast,
            timeout=timeout,
        )
        if failures and not return_exceptions:
            logger.warning(
                "Batch %d failed: %d of %d job(s) raised",
                batch_index,
                len(failures),
                len(batch),
            )
            raise BatchError(batch_index, failures)
        logger.debug("Batch %d completed", batch_index)

    return out


def run_batches(
    items: Iterable[T],
    func: Callable[[int, int, T], R],
    /,
    batch_size: int | None = None,
    **kwargs: Any,
) -> list[R | Exception]:
    """Blocking ``process_batches``; not callable from a running event loop."""
    return anyio.run(
        partial(process_batches, items, func, batch_size, **kwargs),
        backend=settings.async_backend,
    )
