"""User list projection for the list screen.

Call context:
    The list screen calls ``load`` on open and ``retry`` from the error
    state's retry action; it renders whatever ``state`` holds afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from roster.domain.entities import User
from roster.domain.outcome import Error, Success
from roster.usecases.get_all_users import GetAllUsers

from .error_state import ErrorState, error_state_from

LOADING = "loading"
EMPTY = "empty"
SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class UserListState:
    phase: str = LOADING
    users: Tuple[User, ...] = ()
    error: Optional[ErrorState] = None


class UserListVM:
    """Keeps the user list screen state; the use case does the I/O."""

    def __init__(
        self,
        get_all_users: GetAllUsers,
        *,
        on_state_changed: Optional[Callable[[UserListState], None]] = None,
    ) -> None:
        self.get_all_users = get_all_users
        self.on_state_changed = on_state_changed
        self.state = UserListState()

    def load(self) -> UserListState:
        self._set_state(UserListState(phase=LOADING))
        outcome = self.get_all_users()
        if isinstance(outcome, Success):
            users = tuple(outcome.data)
            self._set_state(UserListState(phase=SUCCESS if users else EMPTY, users=users))
        elif isinstance(outcome, Error):
            self._set_state(UserListState(phase=ERROR, error=error_state_from(outcome)))
        return self.state

    def retry(self) -> UserListState:
        """Reload, unless the current error is not retryable."""
        if self.state.error is not None and not self.state.error.is_retryable:
            return self.state
        return self.load()

    def _set_state(self, state: UserListState) -> None:
        self.state = state
        if self.on_state_changed:
            self.on_state_changed(state)


__all__ = ["EMPTY", "ERROR", "LOADING", "SUCCESS", "UserListState", "UserListVM"]
