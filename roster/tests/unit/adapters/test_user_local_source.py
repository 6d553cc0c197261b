from __future__ import annotations

import threading

from roster.adapters.user_local import UserLocalSource
from roster.domain.entities import UserRecord
from roster.domain.errors import LocalFailure, LocalFailureKind
from roster.domain.outcome import Error, ErrorCategory, Success


def test_save_then_fetch_round_trip() -> None:
    local = UserLocalSource()
    record = UserRecord(1, "Leanne Graham", "sincere@april.biz")

    assert local.save(record) == Success(True)
    assert local.fetch_one(1) == Success(record)
    assert local.fetch_all() == Success([record])


def test_fetch_missing_user_is_not_found() -> None:
    result = UserLocalSource().fetch_one(42)

    assert isinstance(result, Error)
    assert result.category is ErrorCategory.NOT_FOUND
    assert result.message == "User not found with ID: 42"
    assert isinstance(result.cause, LocalFailure)
    assert result.cause.kind is LocalFailureKind.NOT_FOUND


def test_fetch_all_on_empty_store_is_empty_success() -> None:
    assert UserLocalSource().fetch_all() == Success([])


def test_save_rejects_unassigned_id() -> None:
    local = UserLocalSource()

    result = local.save(UserRecord(-1, "New", "new@example.com"))

    assert isinstance(result, Error)
    assert result.category is ErrorCategory.VALIDATION
    assert len(local) == 0


def test_save_overwrites_existing_record() -> None:
    local = UserLocalSource()
    local.save(UserRecord(1, "Old", "old@example.com"))
    local.save(UserRecord(1, "New", "new@example.com"))

    assert local.fetch_one(1) == Success(UserRecord(1, "New", "new@example.com"))
    assert len(local) == 1


def test_delete_removes_and_reports_absent_ids() -> None:
    local = UserLocalSource()
    local.save(UserRecord(3, "C", "c@example.com"))

    assert local.delete(3) == Success(True)
    again = local.delete(3)
    assert isinstance(again, Error)
    assert again.category is ErrorCategory.NOT_FOUND


def test_clear_empties_store() -> None:
    local = UserLocalSource()
    local.save(UserRecord(1, "A", "a@example.com"))
    local.clear()

    assert local.fetch_all() == Success([])


def test_concurrent_saves_are_all_kept() -> None:
    local = UserLocalSource()

    def writer(offset: int) -> None:
        for i in range(50):
            local.save(UserRecord(offset + i, f"user{offset + i}", "u@example.com"))

    threads = [threading.Thread(target=writer, args=(n * 100,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    result = local.fetch_all()
    assert isinstance(result, Success)
    assert len(result.data) == 200
