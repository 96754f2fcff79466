# Copyright (c) 2025-2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from .batch import JobFailure

__all__ = (
    "BatchError",
    "FluentSeqError",
    "SerializationError",
    "ValidationError",
)


class FluentSeqError(Exception):
    default_message: ClassVar[str] = "fluentseq error"
    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message or self.default_message)
        if cause:
            self.__cause__ = cause  # preserves traceback
        self.message = message or self.default_message
        self.details = details or {}

    def to_dict(self, *, include_cause: bool = False) -> dict[str, Any]:
        data = {
            "error": self.__class__.__name__,
            "message": self.message,
            **({"details": self.details} if self.details else {}),
        }
        if include_cause and (cause := self.get_cause()):
            data["cause"] = repr(cause)
        return data

    def get_cause(self) -> BaseException | None:
        """Get the cause of this error, if any."""
        return self.__cause__


class ValidationError(FluentSeqError):
    """Raised when an operation receives an argument it cannot use."""

    default_message = "Validation failed"
    __slots__ = ()

    @classmethod
    def from_value(
        cls,
        value: Any,
        *,
        expected: str | None = None,
        message: str | None = None,
        cause: BaseException | None = None,
        **extra: Any,
    ) -> ValidationError:
        details = {
            "value": value,
            "type": type(value).__name__,
            **({"expected": expected} if expected else {}),
            **extra,
        }
        return cls(message=message, details=details, cause=cause)


class SerializationError(FluentSeqError):
    """Raised when elements cannot be encoded to, or decoded from, JSON."""

    default_message = "Serialization failed"
    __slots__ = ()


class BatchError(FluentSeqError):
    """One or more jobs of a batch failed.

    ``failures`` holds every failure observed in the batch, in job order.
    The first failure's exception is chained as ``__cause__``.
    """

    default_message = "Batch processing failed"
    __slots__ = ("batch_index", "failures")

    def __init__(
        self,
        batch_index: int,
        failures: list[JobFailure],
        message: str | None = None,
    ):
        failures = sorted(failures, key=lambda f: f.job_index)
        super().__init__(
            message
            or f"{len(failures)} job(s) failed in batch {batch_index}",
            details={
                "batch_index": batch_index,
                "failed_jobs": [f.job_index for f in failures],
            },
            cause=failures[0].exception if failures else None,
        )
        self.batch_index = batch_index
        self.failures = failures

    @property
    def exceptions(self) -> list[BaseException]:
        return [f.exception for f in self.failures]
