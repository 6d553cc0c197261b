"""Outcome model returned by data sources, the repository, and use cases.

An ``Outcome`` is exactly one of ``Success``, ``Error`` or ``Pending``.
The data layer always settles to ``Success`` or ``Error``; ``Pending`` only
exists so view models can represent an in-flight request with the same type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Generic, Optional, TypeVar, Union

T = TypeVar("T")


class ErrorCategory(str, Enum):
    """User-facing failure categories consumed by presentation code."""

    NETWORK = "NETWORK"
    SERVER = "SERVER"
    CLIENT = "CLIENT"
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    LOCAL = "LOCAL"
    UNKNOWN = "UNKNOWN"


RETRYABLE_CATEGORIES: FrozenSet[ErrorCategory] = frozenset(
    {
        ErrorCategory.NETWORK,
        ErrorCategory.SERVER,
        ErrorCategory.LOCAL,
        ErrorCategory.UNKNOWN,
    }
)


def is_retryable(category: ErrorCategory) -> bool:
    """Return whether presentation should offer a retry action for ``category``."""
    return category in RETRYABLE_CATEGORIES


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T


@dataclass(frozen=True)
class Error:
    """Settled failure with a user-presentable message.

    ``cause`` holds the classified failure (``FailureDetail`` or
    ``LocalFailure``) when one exists; it does not take part in equality.
    """

    message: str
    category: ErrorCategory
    cause: Optional[Any] = field(default=None, compare=False)

    @property
    def is_retryable(self) -> bool:
        return is_retryable(self.category)


class Pending:
    """In-flight marker; never produced by the data layer."""

    _instance: Optional["Pending"] = None

    def __new__(cls) -> "Pending":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Pending"


PENDING = Pending()

Outcome = Union[Success[T], Error, Pending]


def is_success(outcome: Outcome[Any]) -> bool:
    return isinstance(outcome, Success)


def is_error(outcome: Outcome[Any]) -> bool:
    return isinstance(outcome, Error)


def is_pending(outcome: Outcome[Any]) -> bool:
    return isinstance(outcome, Pending)


def data_or_none(outcome: Outcome[T]) -> Optional[T]:
    """Return the success payload, or ``None`` for any other variant."""
    if isinstance(outcome, Success):
        return outcome.data
    return None


__all__ = [
    "ErrorCategory",
    "Error",
    "Outcome",
    "PENDING",
    "Pending",
    "RETRYABLE_CATEGORIES",
    "Success",
    "data_or_none",
    "is_error",
    "is_pending",
    "is_retryable",
    "is_success",
]
