# Copyright (c) 2025-2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Thin facade over anyio used by batch processing.

All helpers are backend-neutral (asyncio/trio).
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, TypeVar

import anyio
import anyio.abc
import anyio.lowlevel
import anyio.to_thread

T = TypeVar("T")

__all__ = (
    "CapacityLimiter",
    "TaskGroup",
    "checkpoint",
    "create_task_group",
    "get_cancelled_exc_class",
    "is_coro_func",
    "run_sync",
    "run_with_timeout",
)

CapacityLimiter = anyio.CapacityLimiter


class TaskGroup:
    """Minimal task group surface: spawn and cancel."""

    __slots__ = ("_tg",)

    def __init__(self, tg: anyio.abc.TaskGroup) -> None:
        self._tg = tg

    def start_soon(
        self,
        func: Callable[..., Awaitable[Any]],
        *args: Any,
        name: str | None = None,
    ) -> None:
        self._tg.start_soon(func, *args, name=name)

    def cancel(self) -> None:
        self._tg.cancel_scope.cancel()


@asynccontextmanager
async def create_task_group() -> AsyncIterator[TaskGroup]:
    async with anyio.create_task_group() as tg:
        yield TaskGroup(tg)


def get_cancelled_exc_class() -> type[BaseException]:
    """Return the backend-native cancellation exception class."""
    return anyio.get_cancelled_exc_class()


async def checkpoint() -> None:
    """Yield to the scheduler and deliver any pending cancellation."""
    await anyio.lowlevel.checkpoint()


def is_coro_func(func: Callable[..., Any]) -> bool:
    """Check if a callable is a coroutine function.

    Not cached, so callables and their closures are never retained.
    """
    if inspect.iscoroutinefunction(func):
        return True
    # callable objects with an async __call__
    call = getattr(func, "__call__", None)
    return call is not None and inspect.iscoroutinefunction(call)


async def run_sync(
    func: Callable[..., T],
    *args: Any,
    limiter: anyio.CapacityLimiter | None = None,
) -> T:
    """Run a blocking callable on a worker thread.

    The thread is never abandoned: cancellation is delivered only once it
    returns.
    """
    return await anyio.to_thread.run_sync(func, *args, limiter=limiter)


async def run_with_timeout(
    func: Callable[..., Any],
    *args: Any,
    timeout: float | None = None,
    limiter: anyio.CapacityLimiter | None = None,
) -> Any:
    """Await ``func(*args)``, offloading sync callables to a thread.

    Coroutine functions are cancelled at the deadline. A worker thread
    cannot be interrupted, so a sync callable always runs to completion and
    fails afterwards if it overran; the caller never returns while the
    thread is still running.

    Raises:
        TimeoutError: If ``timeout`` seconds pass before completion.
    """
    if not is_coro_func(func):
        started = anyio.current_time()
        result = await run_sync(func, *args, limiter=limiter)
        if timeout is not None and anyio.current_time() - started > timeout:
            raise TimeoutError(f"Function call timed out after {timeout}s")
        return result

    if timeout is None:
        return await func(*args)

    with anyio.move_on_after(timeout) as cancel_scope:
        return await func(*args)
    if cancel_scope.cancelled_caught:
        raise TimeoutError(f"Function call timed out after {timeout}s")
