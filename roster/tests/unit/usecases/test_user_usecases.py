from __future__ import annotations

from typing import Any, List, Tuple

from roster.domain.entities import User
from roster.domain.outcome import Error, ErrorCategory, Success
from roster.usecases import DeleteUser, GetAllUsers, GetUserById, SaveUser


class _RecordingRepo:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, Any]] = []

    def get_one(self, user_id):
        self.calls.append(("get_one", user_id))
        return Success(User(user_id, "Ann", "ann@example.com"))

    def get_all(self):
        self.calls.append(("get_all", None))
        return Success([])

    def save(self, user):
        self.calls.append(("save", user))
        return Error("offline", ErrorCategory.NETWORK)

    def delete(self, user_id):
        self.calls.append(("delete", user_id))
        return Success(True)


def test_get_user_by_id_forwards_outcome() -> None:
    repo = _RecordingRepo()

    assert GetUserById(repo)(4) == Success(User(4, "Ann", "ann@example.com"))
    assert repo.calls == [("get_one", 4)]


def test_get_all_users_forwards_outcome() -> None:
    repo = _RecordingRepo()

    assert GetAllUsers(repo)() == Success([])
    assert repo.calls == [("get_all", None)]


def test_save_user_returns_error_unchanged() -> None:
    repo = _RecordingRepo()
    user = User(2, "Bo", "bo@example.com")

    result = SaveUser(repo)(user)

    assert result == Error("offline", ErrorCategory.NETWORK)
    assert repo.calls == [("save", user)]


def test_delete_user_forwards_id() -> None:
    repo = _RecordingRepo()

    assert DeleteUser(repo)(9) == Success(True)
    assert repo.calls == [("delete", 9)]
