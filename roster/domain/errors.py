"""Failure taxonomy shared by data sources and the repository.

Transport failures are described by the closed ``FailureDetail`` variant set,
local storage failures by ``LocalFailure``. ``to_domain_error`` lifts either
one into an ``ErrorCategory`` plus the retry flag presentation code reads.
Exception-to-variant classification lives next to the transport in
``roster.adapters.failure_classifier``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, NamedTuple, Optional, Tuple, Type, Union

from .outcome import ErrorCategory, is_retryable


@dataclass(frozen=True)
class ErrorBody:
    """Structured error payload returned by the users API on non-2xx responses."""

    message: str
    technical_message: Optional[str] = None
    error_code: Optional[str] = None
    field_errors: Optional[Dict[str, str]] = None


def _cause_text(cause: Optional[BaseException]) -> str:
    if cause is None:
        return "no details"
    text = str(cause).strip()
    return text or type(cause).__name__


class FailureDetail:
    """Base of the closed set of classified transport failures."""

    kind: ClassVar[str] = "FailureDetail"

    def user_message(self) -> str:
        raise NotImplementedError

    def technical_message(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class NoConnectivity(FailureDetail):
    kind: ClassVar[str] = "NoConnectivity"
    cause: Optional[BaseException] = field(default=None, compare=False)

    def user_message(self) -> str:
        return "No internet connection. Please check your network settings."

    def technical_message(self) -> str:
        return f"{self.kind}: {_cause_text(self.cause)}"


@dataclass(frozen=True)
class Timeout(FailureDetail):
    kind: ClassVar[str] = "Timeout"
    cause: Optional[BaseException] = field(default=None, compare=False)

    def user_message(self) -> str:
        return "Request timed out. Please try again."

    def technical_message(self) -> str:
        return f"{self.kind}: {_cause_text(self.cause)}"


@dataclass(frozen=True)
class UnresolvedHost(FailureDetail):
    kind: ClassVar[str] = "UnresolvedHost"
    cause: Optional[BaseException] = field(default=None, compare=False)

    def user_message(self) -> str:
        return "Could not reach the server. Please check your connection."

    def technical_message(self) -> str:
        return f"{self.kind}: {_cause_text(self.cause)}"


def _http_technical(kind: str, status: int, body: Optional[ErrorBody]) -> str:
    base = f"{kind}: HTTP {status}"
    if body is None:
        return base
    detail = body.technical_message or body.message
    if body.error_code:
        detail = f"{detail} [{body.error_code}]"
    return f"{base}: {detail}"


@dataclass(frozen=True)
class ClientFailure(FailureDetail):
    """HTTP 4xx with the parsed error body, when there was one."""

    kind: ClassVar[str] = "ClientFailure"
    status: int
    body: Optional[ErrorBody] = None

    def user_message(self) -> str:
        if self.status == 401:
            return "Authentication required. Please log in again."
        if self.status == 403:
            return "You don't have permission to access this resource (forbidden)."
        if self.status == 404:
            return "The requested resource was not found."
        if self.body is not None and self.body.message:
            return self.body.message
        return f"Client error: {self.status}"

    def technical_message(self) -> str:
        return _http_technical(self.kind, self.status, self.body)


@dataclass(frozen=True)
class ServerFailure(FailureDetail):
    """HTTP 5xx with the parsed error body, when there was one."""

    kind: ClassVar[str] = "ServerFailure"
    status: int
    body: Optional[ErrorBody] = None

    def user_message(self) -> str:
        return "Server error. Please try again later."

    def technical_message(self) -> str:
        return _http_technical(self.kind, self.status, self.body)


@dataclass(frozen=True)
class ParseFailure(FailureDetail):
    kind: ClassVar[str] = "ParseFailure"
    reason: str = ""
    cause: Optional[BaseException] = field(default=None, compare=False)

    def user_message(self) -> str:
        return "Error processing the response. Please try again."

    def technical_message(self) -> str:
        return f"{self.kind}: {self.reason or _cause_text(self.cause)}"


@dataclass(frozen=True)
class Unclassified(FailureDetail):
    kind: ClassVar[str] = "Unclassified"
    cause: Optional[BaseException] = field(default=None, compare=False)

    def user_message(self) -> str:
        return "An unexpected error occurred. Please try again."

    def technical_message(self) -> str:
        return f"{self.kind}: {_cause_text(self.cause)}"


FAILURE_DETAIL_TYPES: Tuple[Type[FailureDetail], ...] = (
    NoConnectivity,
    Timeout,
    ClientFailure,
    ServerFailure,
    UnresolvedHost,
    ParseFailure,
    Unclassified,
)


def classify_status(status: int, body: Optional[ErrorBody] = None) -> FailureDetail:
    """Classify a completed non-2xx response by its status code."""
    if 400 <= status <= 499:
        return ClientFailure(status, body)
    if 500 <= status <= 599:
        return ServerFailure(status, body)
    return Unclassified()


class LocalFailureKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_ID = "invalid_id"
    UNEXPECTED = "unexpected"


_LOCAL_SOURCE_CATEGORIES: Dict[LocalFailureKind, ErrorCategory] = {
    LocalFailureKind.NOT_FOUND: ErrorCategory.NOT_FOUND,
    LocalFailureKind.INVALID_ID: ErrorCategory.VALIDATION,
    LocalFailureKind.UNEXPECTED: ErrorCategory.UNKNOWN,
}


@dataclass(frozen=True)
class LocalFailure:
    """Failure reported by the in-memory local source."""

    kind: LocalFailureKind
    message: str
    cause: Optional[BaseException] = field(default=None, compare=False)

    @property
    def source_category(self) -> ErrorCategory:
        """Category the local source itself reports for this failure."""
        return _LOCAL_SOURCE_CATEGORIES[self.kind]


class DomainError(NamedTuple):
    category: ErrorCategory
    is_retryable: bool


def _client_category(status: int) -> ErrorCategory:
    if status == 404:
        return ErrorCategory.NOT_FOUND
    if status == 401:
        return ErrorCategory.UNAUTHORIZED
    if status == 403:
        return ErrorCategory.FORBIDDEN
    if status == 422:
        return ErrorCategory.VALIDATION
    return ErrorCategory.CLIENT


def to_domain_error(failure: Union[FailureDetail, LocalFailure]) -> DomainError:
    """Lift a transport or local failure into a domain category.

    Raises:
        TypeError: ``failure`` is neither a known ``FailureDetail`` variant
            nor a ``LocalFailure``.
    """
    if isinstance(failure, LocalFailure):
        category = ErrorCategory.LOCAL
    elif isinstance(failure, (NoConnectivity, Timeout, UnresolvedHost)):
        category = ErrorCategory.NETWORK
    elif isinstance(failure, ServerFailure):
        category = ErrorCategory.SERVER
    elif isinstance(failure, ClientFailure):
        category = _client_category(failure.status)
    elif isinstance(failure, (ParseFailure, Unclassified)):
        category = ErrorCategory.UNKNOWN
    else:
        raise TypeError(f"Unsupported failure type: {type(failure).__name__}")
    return DomainError(category, is_retryable(category))


__all__ = [
    "ClientFailure",
    "DomainError",
    "ErrorBody",
    "FAILURE_DETAIL_TYPES",
    "FailureDetail",
    "LocalFailure",
    "LocalFailureKind",
    "NoConnectivity",
    "ParseFailure",
    "ServerFailure",
    "Timeout",
    "Unclassified",
    "UnresolvedHost",
    "classify_status",
    "to_domain_error",
]
