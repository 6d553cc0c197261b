from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, TypeVar

from roster.domain.entities import UNASSIGNED_ID, UserId, UserRecord
from roster.domain.errors import LocalFailure, LocalFailureKind
from roster.domain.outcome import Error, Outcome, Success
from roster.domain.ports import UserDataSource

T = TypeVar("T")


class UserLocalSource(UserDataSource):
    """Volatile in-memory user table shared by every caller in the process.

    One lock guards the table. It is held for a single lookup/insert/delete
    and never across a call out of this class.
    """

    def __init__(self) -> None:
        self._users: Dict[UserId, UserRecord] = {}
        self._lock = threading.Lock()
        self._log = logging.getLogger(__name__)

    def fetch_one(self, user_id: UserId) -> Outcome[UserRecord]:
        def lookup() -> Outcome[UserRecord]:
            record = self._users.get(user_id)
            if record is None:
                return _failure(LocalFailureKind.NOT_FOUND, f"User not found with ID: {user_id}")
            return Success(record)

        return self._guarded(lookup)

    def fetch_all(self) -> Outcome[List[UserRecord]]:
        return self._guarded(lambda: Success(list(self._users.values())))

    def save(self, record: UserRecord) -> Outcome[bool]:
        if record.id == UNASSIGNED_ID:
            return _failure(LocalFailureKind.INVALID_ID, "Invalid user ID: ID cannot be empty")

        def upsert() -> Outcome[bool]:
            self._users[record.id] = record
            return Success(True)

        return self._guarded(upsert)

    def delete(self, user_id: UserId) -> Outcome[bool]:
        def remove() -> Outcome[bool]:
            if self._users.pop(user_id, None) is None:
                return _failure(LocalFailureKind.NOT_FOUND, f"User not found with ID: {user_id}")
            return Success(True)

        return self._guarded(remove)

    def clear(self) -> None:
        with self._lock:
            self._users.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def _guarded(self, operation: Callable[[], Outcome[T]]) -> Outcome[T]:
        try:
            with self._lock:
                return operation()
        except Exception as exc:
            self._log.exception("Local user store failure")
            return _failure(LocalFailureKind.UNEXPECTED, f"Local storage error: {exc}", exc)


def _failure(kind: LocalFailureKind, message: str, cause: Exception | None = None) -> Error:
    failure = LocalFailure(kind, message, cause)
    return Error(message, failure.source_category, failure)


__all__ = ["UserLocalSource"]
