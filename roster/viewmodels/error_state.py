"""Error projection shared by the user view models.

Call context:
    ``UserListVM`` and ``UserDetailVM`` turn ``Error`` outcomes into
    ``ErrorState`` so views can pick copy by ``category`` and gate the retry
    action strictly by ``is_retryable``.
"""

from __future__ import annotations

from dataclasses import dataclass

from roster.domain.outcome import Error, ErrorCategory

_TITLES = {
    ErrorCategory.NETWORK: "Connection problem",
    ErrorCategory.SERVER: "Server problem",
    ErrorCategory.CLIENT: "Request rejected",
    ErrorCategory.VALIDATION: "Invalid data",
    ErrorCategory.NOT_FOUND: "Not found",
    ErrorCategory.UNAUTHORIZED: "Sign-in required",
    ErrorCategory.FORBIDDEN: "Access denied",
    ErrorCategory.LOCAL: "Storage problem",
    ErrorCategory.UNKNOWN: "Something went wrong",
}


@dataclass(frozen=True)
class ErrorState:
    message: str
    category: ErrorCategory
    is_retryable: bool

    @property
    def title(self) -> str:
        return error_title(self.category)


def error_state_from(error: Error) -> ErrorState:
    return ErrorState(
        message=error.message,
        category=error.category,
        is_retryable=error.is_retryable,
    )


def error_title(category: ErrorCategory) -> str:
    """Short heading for an error screen."""
    return _TITLES.get(category, _TITLES[ErrorCategory.UNKNOWN])


__all__ = ["ErrorState", "error_state_from", "error_title"]
