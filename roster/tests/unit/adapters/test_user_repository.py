from __future__ import annotations

import time
from typing import Any, List

from roster.adapters.user_local import UserLocalSource
from roster.adapters.user_repository import CachedUserRepository
from roster.adapters.user_rest_mock import (
    UserRestMock,
    simulate_client_error,
    simulate_no_connectivity,
    simulate_parse_error,
    simulate_server_error,
    simulate_timeout,
    simulate_unknown_host,
    simulate_validation_error,
)
from roster.domain.entities import User, UserRecord
from roster.domain.errors import (
    ClientFailure,
    LocalFailure,
    LocalFailureKind,
    NoConnectivity,
    ParseFailure,
    ServerFailure,
    UnresolvedHost,
)
from roster.domain.outcome import PENDING, Error, ErrorCategory, Outcome, Success
from roster.utils.background import InlineTaskRunner, ThreadTaskRunner

ALICE = UserRecord(1, "Alice", "alice@example.com")
BOB = UserRecord(2, "Bob", "bob@example.com")


def _repo(remote: Any, local: Any = None, **kwargs: Any) -> CachedUserRepository:
    kwargs.setdefault("runner", InlineTaskRunner())
    return CachedUserRepository(UserLocalSource() if local is None else local, remote, **kwargs)


class _PendingRemote:
    """Remote that never settles to success or error."""

    def fetch_one(self, user_id: int) -> Outcome[UserRecord]:
        return PENDING

    def fetch_all(self) -> Outcome[List[UserRecord]]:
        return PENDING

    def save(self, record: UserRecord) -> Outcome[bool]:
        return PENDING

    def delete(self, user_id: int) -> Outcome[bool]:
        return PENDING


class _ExplodingLocal(UserLocalSource):
    def save(self, record: UserRecord) -> Outcome[bool]:
        raise RuntimeError("disk on fire")


class _RejectingLocal(UserLocalSource):
    def save(self, record: UserRecord) -> Outcome[bool]:
        failure = LocalFailure(LocalFailureKind.UNEXPECTED, "Local storage error: disk full")
        return Error(failure.message, failure.source_category, failure)


class _SlowCacheLocal(UserLocalSource):
    def save(self, record: UserRecord) -> Outcome[bool]:
        time.sleep(0.2)
        return super().save(record)


def test_remote_success_is_returned_and_cached() -> None:
    local = UserLocalSource()
    repo = _repo(UserRestMock.with_records([ALICE]), local)

    assert repo.get_one(1) == Success(User(1, "Alice", "alice@example.com"))
    assert local.fetch_one(1) == Success(ALICE)


def test_get_all_caches_every_record() -> None:
    local = UserLocalSource()
    repo = _repo(UserRestMock.with_records([ALICE, BOB]), local)

    result = repo.get_all()

    assert isinstance(result, Success)
    assert [user.id for user in result.data] == [1, 2]
    assert len(local) == 2


def test_remote_failure_falls_back_to_local() -> None:
    remote = UserRestMock()
    remote.fail_always(simulate_no_connectivity())
    local = UserLocalSource()
    local.save(BOB)
    repo = _repo(remote, local)

    assert repo.get_one(2) == Success(User(2, "Bob", "bob@example.com"))
    assert repo.get_all() == Success([User(2, "Bob", "bob@example.com")])


def test_remote_error_wins_when_local_misses() -> None:
    remote = UserRestMock()
    remote.fail_always(simulate_timeout())
    repo = _repo(remote)

    result = repo.get_one(9)

    assert isinstance(result, Error)
    assert result.category is ErrorCategory.NETWORK
    assert result.is_retryable is True


def test_remote_not_found_reported_when_local_misses() -> None:
    repo = _repo(UserRestMock())

    result = repo.get_one(77)

    assert isinstance(result, Error)
    assert result.category is ErrorCategory.NOT_FOUND
    assert result.is_retryable is False
    assert isinstance(result.cause, ClientFailure)


def test_write_through_can_be_disabled() -> None:
    local = UserLocalSource()
    repo = _repo(UserRestMock.with_records([ALICE]), local, write_through=False)

    repo.get_one(1)

    assert len(local) == 0


def test_cache_write_failure_does_not_affect_read() -> None:
    repo = _repo(UserRestMock.with_records([ALICE]), _ExplodingLocal())

    assert repo.get_one(1) == Success(User(1, "Alice", "alice@example.com"))


def test_background_write_through_completes() -> None:
    local = UserLocalSource()
    repo = _repo(UserRestMock.with_records([ALICE, BOB]), local, runner=ThreadTaskRunner())

    repo.get_all()

    assert repo.wait_for_cache_writes(timeout=5.0) is True
    assert len(local) == 2


def test_save_writes_both_sources() -> None:
    remote = UserRestMock()
    local = UserLocalSource()
    repo = _repo(remote, local)

    assert repo.save(User(1, "Alice", "alice@example.com")) == Success(True)
    assert 1 in remote.users
    assert local.fetch_one(1) == Success(ALICE)


def test_save_succeeds_locally_when_remote_fails() -> None:
    remote = UserRestMock()
    remote.fail_always(simulate_server_error())
    local = UserLocalSource()
    repo = _repo(remote, local)

    assert repo.save(User(1, "Alice", "alice@example.com")) == Success(True)
    assert local.fetch_one(1) == Success(ALICE)


def test_save_rejects_unassigned_id_before_any_source() -> None:
    remote = UserRestMock()
    repo = _repo(remote)

    result = repo.save(User(-1, "New", "new@example.com"))

    assert isinstance(result, Error)
    assert result.category is ErrorCategory.VALIDATION
    assert remote.calls == []


def test_delete_succeeds_if_either_source_does() -> None:
    local = UserLocalSource()
    local.save(ALICE)
    repo = _repo(UserRestMock(), local)

    assert repo.delete(1) == Success(True)
    assert len(local) == 0


def test_delete_reports_remote_error_when_both_fail() -> None:
    remote = UserRestMock()
    remote.fail_always(simulate_no_connectivity())
    repo = _repo(remote)

    result = repo.delete(5)

    assert isinstance(result, Error)
    assert result.category is ErrorCategory.NETWORK
    assert isinstance(result.cause, NoConnectivity)


def test_delete_missing_everywhere_is_not_found() -> None:
    repo = _repo(UserRestMock())

    result = repo.delete(5)

    assert isinstance(result, Error)
    assert result.category is ErrorCategory.NOT_FOUND


def test_local_error_is_lifted_when_remote_pending() -> None:
    repo = _repo(_PendingRemote())

    result = repo.delete(5)

    assert isinstance(result, Error)
    assert result.category is ErrorCategory.LOCAL
    assert result.is_retryable is True
    assert isinstance(result.cause, LocalFailure)


def test_read_with_pending_remote_and_local_miss_is_unknown() -> None:
    repo = _repo(_PendingRemote())

    result = repo.get_one(5)

    assert isinstance(result, Error)
    assert result.category is ErrorCategory.UNKNOWN


def test_transient_remote_failure_recovers_on_next_call() -> None:
    remote = UserRestMock.with_records([ALICE])
    remote.fail_next(simulate_client_error(403, "Forbidden"))
    repo = _repo(remote)

    first = repo.get_one(1)
    assert isinstance(first, Error)
    assert first.category is ErrorCategory.FORBIDDEN

    assert repo.get_one(1) == Success(User(1, "Alice", "alice@example.com"))


def test_remote_read_overwrites_stale_local_copy() -> None:
    local = UserLocalSource()
    local.save(UserRecord(1, "Stale", "stale@example.com"))
    repo = _repo(UserRestMock.with_records([ALICE]), local)

    assert repo.get_one(1) == Success(User(1, "Alice", "alice@example.com"))
    assert local.fetch_one(1) == Success(ALICE)


def test_get_all_on_empty_remote_is_empty_success() -> None:
    assert _repo(UserRestMock()).get_all() == Success([])


def test_save_reports_remote_error_when_both_fail() -> None:
    remote = UserRestMock()
    remote.fail_always(simulate_server_error())
    repo = _repo(remote, _RejectingLocal())

    result = repo.save(User(1, "Alice", "alice@example.com"))

    assert isinstance(result, Error)
    assert result.category is ErrorCategory.SERVER
    assert isinstance(result.cause, ServerFailure)


def test_save_succeeds_when_only_remote_accepts() -> None:
    remote = UserRestMock()
    repo = _repo(remote, _RejectingLocal())

    assert repo.save(User(1, "Alice", "alice@example.com")) == Success(True)
    assert 1 in remote.users


def test_validation_failure_is_not_retryable() -> None:
    remote = UserRestMock()
    remote.fail_next(simulate_validation_error({"email": "Invalid email format"}))
    repo = _repo(remote)

    result = repo.get_one(1)

    assert isinstance(result, Error)
    assert result.category is ErrorCategory.VALIDATION
    assert result.is_retryable is False
    assert result.message == "Validation failed"


def test_unknown_host_is_network_error() -> None:
    remote = UserRestMock()
    remote.fail_next(simulate_unknown_host())
    repo = _repo(remote)

    result = repo.get_one(1)

    assert isinstance(result, Error)
    assert result.category is ErrorCategory.NETWORK
    assert result.is_retryable is True
    assert isinstance(result.cause, UnresolvedHost)


def test_parse_failure_is_unknown_and_retryable() -> None:
    remote = UserRestMock()
    remote.fail_next(simulate_parse_error())
    repo = _repo(remote)

    result = repo.get_one(1)

    assert isinstance(result, Error)
    assert result.category is ErrorCategory.UNKNOWN
    assert result.is_retryable is True
    assert isinstance(result.cause, ParseFailure)


def test_delete_is_not_undone_by_pending_cache_write() -> None:
    remote = UserRestMock.with_records([ALICE])
    local = _SlowCacheLocal()
    repo = _repo(remote, local, runner=ThreadTaskRunner())

    repo.get_all()
    assert repo.delete(1) == Success(True)

    remote.fail_always(simulate_no_connectivity())
    assert repo.get_all() == Success([])
    assert len(local) == 0
