# Copyright (c) 2025-2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Environment settings management using pydantic-settings.

Every field can be overridden through a ``FLUENTSEQ_``-prefixed environment
variable or one of the ``.env`` files listed below.
"""

from __future__ import annotations

from typing import ClassVar, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ("CollectionSettings", "settings")


class CollectionSettings(BaseSettings, frozen=True):
    """Library-wide defaults with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="FLUENTSEQ_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    random_seed: int | None = None
    """Seed applied once to the shared random source. None uses OS entropy."""

    default_batch_size: int = Field(default=10, ge=1)
    """Batch size used when ``abatch``/``batch`` are called without one."""

    async_backend: Literal["asyncio", "trio"] = "asyncio"
    """Event loop backend the synchronous ``batch`` wrapper runs on."""

    json_sort_keys: bool = False
    """Sort mapping keys when serializing elements."""

    _instance: ClassVar[CollectionSettings | None] = None


settings = CollectionSettings()
CollectionSettings._instance = settings
