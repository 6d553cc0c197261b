from __future__ import annotations

from typing import List

from roster.domain.entities import User
from roster.domain.outcome import Error, ErrorCategory, Success
from roster.viewmodels.user_list_vm import EMPTY, ERROR, LOADING, SUCCESS, UserListState, UserListVM


class _Scripted:
    def __init__(self, *outcomes) -> None:
        self._outcomes = list(outcomes)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self._outcomes.pop(0)


def test_load_success_publishes_loading_then_users() -> None:
    seen: List[UserListState] = []
    users = [User(1, "A", "a@example.com"), User(2, "B", "b@example.com")]
    vm = UserListVM(_Scripted(Success(users)), on_state_changed=seen.append)

    state = vm.load()

    assert [s.phase for s in seen] == [LOADING, SUCCESS]
    assert state.users == tuple(users)
    assert state.error is None


def test_load_empty_list() -> None:
    vm = UserListVM(_Scripted(Success([])))

    assert vm.load().phase == EMPTY


def test_load_error_exposes_category_and_retryability() -> None:
    vm = UserListVM(_Scripted(Error("No internet connection.", ErrorCategory.NETWORK)))

    state = vm.load()

    assert state.phase == ERROR
    assert state.error is not None
    assert state.error.category is ErrorCategory.NETWORK
    assert state.error.is_retryable is True
    assert state.error.message == "No internet connection."


def test_retry_reloads_after_retryable_error() -> None:
    use_case = _Scripted(
        Error("Server error. Please try again later.", ErrorCategory.SERVER),
        Success([User(1, "A", "a@example.com")]),
    )
    vm = UserListVM(use_case)
    vm.load()

    assert vm.retry().phase == SUCCESS
    assert use_case.calls == 2


def test_retry_is_ignored_for_non_retryable_error() -> None:
    use_case = _Scripted(Error("Access denied", ErrorCategory.FORBIDDEN))
    vm = UserListVM(use_case)
    vm.load()

    state = vm.retry()

    assert state.phase == ERROR
    assert use_case.calls == 1
