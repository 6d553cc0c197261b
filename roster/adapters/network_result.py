"""Transport-local result type used inside the REST adapter.

``RawOutcome`` never leaves ``roster.adapters.user_rest``; it is settled into
an ``Outcome`` before the data source returns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from roster.domain.errors import FailureDetail

T = TypeVar("T")


@dataclass(frozen=True)
class RawSuccess(Generic[T]):
    data: T


@dataclass(frozen=True)
class RawFailure:
    detail: FailureDetail


class RawPending:
    def __repr__(self) -> str:
        return "RawPending"


RAW_PENDING = RawPending()

RawOutcome = Union[RawSuccess[T], RawFailure, RawPending]

__all__ = ["RAW_PENDING", "RawFailure", "RawOutcome", "RawPending", "RawSuccess"]
