"""Explicit success/failure values threaded through tool handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class FailureKind(str, Enum):
    VALIDATION = "validation"
    UPSTREAM = "upstream"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """A recoverable failure with a human readable detail.

    `report` carries the per-field violations for validation failures and the
    upstream error details (status code, body excerpt) for upstream failures.
    """

    kind: FailureKind
    detail: str
    report: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return False


Result = Union[Success[T], Failure]
