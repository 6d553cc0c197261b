"""Domain package exports for entities, outcomes, and the failure taxonomy."""

from .entities import UNASSIGNED_ID, User, UserId, UserRecord
from .errors import (
    ClientFailure,
    DomainError,
    ErrorBody,
    FailureDetail,
    LocalFailure,
    LocalFailureKind,
    NoConnectivity,
    ParseFailure,
    ServerFailure,
    Timeout,
    Unclassified,
    UnresolvedHost,
    to_domain_error,
)
from .outcome import (
    PENDING,
    Error,
    ErrorCategory,
    Outcome,
    Pending,
    Success,
    data_or_none,
    is_retryable,
)

__all__ = [
    "ClientFailure",
    "DomainError",
    "Error",
    "ErrorBody",
    "ErrorCategory",
    "FailureDetail",
    "LocalFailure",
    "LocalFailureKind",
    "NoConnectivity",
    "Outcome",
    "PENDING",
    "ParseFailure",
    "Pending",
    "ServerFailure",
    "Success",
    "Timeout",
    "UNASSIGNED_ID",
    "Unclassified",
    "UnresolvedHost",
    "User",
    "UserId",
    "UserRecord",
    "data_or_none",
    "is_retryable",
    "to_domain_error",
]
