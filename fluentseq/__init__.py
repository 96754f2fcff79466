# Copyright (c) 2025-2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import logging

from ._errors import (
    BatchError,
    FluentSeqError,
    SerializationError,
    ValidationError,
)
from ._rng import get_rng, seed
from ._sentinel import Undefined, Unset, is_sentinel, not_sentinel
from .batch import JobFailure, process_batches, run_batches
from .collection import Collection
from .settings import CollectionSettings, settings
from .version import __version__
from .view import CollectionView

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = (
    "__version__",
    "BatchError",
    "Collection",
    "CollectionSettings",
    "CollectionView",
    "FluentSeqError",
    "JobFailure",
    "SerializationError",
    "Undefined",
    "Unset",
    "ValidationError",
    "get_rng",
    "is_sentinel",
    "logger",
    "not_sentinel",
    "process_batches",
    "run_batches",
    "seed",
    "settings",
)
