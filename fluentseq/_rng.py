# Copyright (c) 2025-2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Process-wide random source.

Created on first use and seeded once from ``settings.random_seed``.
Collections accept their own ``random.Random`` for deterministic tests.
"""

from __future__ import annotations

import random
import threading

from .settings import settings

__all__ = ("get_rng", "seed")

_RNG: random.Random | None = None
_LOCK = threading.Lock()


def get_rng() -> random.Random:
    global _RNG
    if _RNG is None:
        with _LOCK:
            if _RNG is None:
                _RNG = random.Random(settings.random_seed)
    return _RNG


def seed(value: int | None = None) -> None:
    """Reseed the shared generator. ``None`` draws fresh OS entropy."""
    get_rng().seed(value)
