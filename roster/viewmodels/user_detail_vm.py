from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from roster.domain.entities import UNASSIGNED_ID, User, UserId
from roster.domain.outcome import Error, Outcome, Success
from roster.usecases.delete_user import DeleteUser
from roster.usecases.get_user_by_id import GetUserById
from roster.usecases.save_user import SaveUser

from .error_state import ErrorState, error_state_from

LOADING = "loading"
SUCCESS = "success"
ERROR = "error"

IDLE = "idle"
RUNNING = "running"
DONE = "done"
FAILED = "failed"


@dataclass(frozen=True)
class UserDetailState:
    phase: str = LOADING
    user: Optional[User] = None
    error: Optional[ErrorState] = None


@dataclass(frozen=True)
class OperationState:
    """Progress of the last save/delete triggered from the detail screen."""

    phase: str = IDLE
    message: str = ""
    error: Optional[ErrorState] = None


class UserDetailVM:
    """Detail screen state plus save/delete commands."""

    def __init__(
        self,
        get_user: GetUserById,
        save_user: SaveUser,
        delete_user: DeleteUser,
        *,
        on_state_changed: Optional[Callable[[UserDetailState], None]] = None,
    ) -> None:
        self.get_user = get_user
        self.save_user = save_user
        self.delete_user = delete_user
        self.on_state_changed = on_state_changed
        self.user_id: Optional[UserId] = None
        self.state = UserDetailState()
        self.operation = OperationState()
        self.saved = False
        self.deleted = False

    def load(self, user_id: Optional[UserId]) -> UserDetailState:
        if user_id is None:
            return self.state
        self.user_id = user_id
        self._set_state(UserDetailState(phase=LOADING))
        outcome = self.get_user(user_id)
        if isinstance(outcome, Success):
            self._set_state(UserDetailState(phase=SUCCESS, user=outcome.data))
        elif isinstance(outcome, Error):
            self._set_state(UserDetailState(phase=ERROR, error=error_state_from(outcome)))
        return self.state

    def retry(self) -> UserDetailState:
        if self.state.error is not None and not self.state.error.is_retryable:
            return self.state
        return self.load(self.user_id)

    def save(self, name: str, email: str, *, user_id: Optional[UserId] = None) -> OperationState:
        """Save the edited fields for ``user_id`` (defaults to the loaded user)."""
        target = user_id if user_id is not None else self.user_id
        user = User(
            id=target if target is not None else UNASSIGNED_ID,
            name=name.strip(),
            email=email.strip(),
        )
        self.operation = OperationState(phase=RUNNING)
        self.operation = self._finish(self.save_user(user), "User saved successfully")
        if self.operation.phase == DONE:
            self.user_id = user.id
            self.saved = True
            self._set_state(UserDetailState(phase=SUCCESS, user=user))
        return self.operation

    def delete(self) -> OperationState:
        if self.user_id is None:
            return self.operation
        self.operation = OperationState(phase=RUNNING)
        self.operation = self._finish(self.delete_user(self.user_id), "User deleted successfully")
        if self.operation.phase == DONE:
            self.deleted = True
        return self.operation

    def reset_operation(self) -> None:
        self.operation = OperationState()
        self.saved = False
        self.deleted = False

    @staticmethod
    def _finish(outcome: Outcome[bool], done_message: str) -> OperationState:
        if isinstance(outcome, Success):
            return OperationState(phase=DONE, message=done_message)
        if isinstance(outcome, Error):
            return OperationState(phase=FAILED, message=outcome.message, error=error_state_from(outcome))
        return OperationState(phase=RUNNING)

    def _set_state(self, state: UserDetailState) -> None:
        self.state = state
        if self.on_state_changed:
            self.on_state_changed(state)


__all__ = ["OperationState", "UserDetailState", "UserDetailVM"]
