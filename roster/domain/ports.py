from __future__ import annotations

from typing import Any, Callable, List, Protocol

from .entities import User, UserId, UserRecord
from .outcome import Outcome


# ---- Ports (Hexagonal boundaries) ----
class UserDataSource(Protocol):
    """Fetch/save/delete user records; every call settles to an Outcome.

    Implementations never let an exception escape: failures come back as
    ``Error`` whose ``cause`` is the classified failure.
    """

    def fetch_one(self, user_id: UserId) -> Outcome[UserRecord]: ...
    def fetch_all(self) -> Outcome[List[UserRecord]]: ...
    def save(self, record: UserRecord) -> Outcome[bool]: ...
    def delete(self, user_id: UserId) -> Outcome[bool]: ...


class UserRepository(Protocol):
    """Single contract over the remote and local user sources."""

    def get_one(self, user_id: UserId) -> Outcome[User]: ...
    def get_all(self) -> Outcome[List[User]]: ...
    def save(self, user: User) -> Outcome[bool]: ...
    def delete(self, user_id: UserId) -> Outcome[bool]: ...


class TaskRunner(Protocol):
    """Runs advisory side effects whose results nobody waits for."""

    def spawn(self, fn: Callable[..., Any], *args: Any, name: str = "") -> None: ...
