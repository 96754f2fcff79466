# Copyright (c) 2025-2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import random

import pytest

from fluentseq import Collection

FRUITS = (
    "apple",
    "orange",
    "strawberry",
    "cherry",
    "banana",
    "apricot",
    "avacado",
    "beans",
    "beets",
    "celery",
    "lettuce",
)


@pytest.fixture
def anyio_backend():
    """Run async tests on asyncio only."""
    return "asyncio"


@pytest.fixture
def fruits():
    return Collection(*FRUITS)


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


@pytest.fixture
def fruit_names():
    return FRUITS
