"""Remote-first user repository with a local fallback cache.

Reads go to the remote source first. A successful remote read is written
through to the local source as a detached, advisory task; a failed one falls
back to the local copy, and when that misses too the remote error is
reported. Writes go to both sources and succeed if either side does.

Call context:
    Built once by ``roster.app.wiring.build_services`` and shared by the
    four user use cases.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from roster.domain.entities import UNASSIGNED_ID, User, UserId, UserRecord
from roster.domain.errors import FailureDetail, LocalFailure, to_domain_error
from roster.domain.outcome import Error, ErrorCategory, Outcome, Success
from roster.domain.ports import TaskRunner, UserDataSource, UserRepository
from roster.utils.background import ThreadTaskRunner

from .mappers import UserMapper

_CACHE_DRAIN_TIMEOUT_S = 5.0


class CachedUserRepository(UserRepository):
    """Compose a remote and a local ``UserDataSource`` behind one contract."""

    def __init__(
        self,
        local: UserDataSource,
        remote: UserDataSource,
        mapper: Optional[UserMapper] = None,
        *,
        runner: Optional[TaskRunner] = None,
        write_through: bool = True,
    ) -> None:
        self.local = local
        self.remote = remote
        self.mapper = mapper or UserMapper()
        self.runner: TaskRunner = runner or ThreadTaskRunner(name_prefix="user-cache")
        self.write_through = write_through
        self._log = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_one(self, user_id: UserId) -> Outcome[User]:
        remote = self.remote.fetch_one(user_id)
        if isinstance(remote, Success):
            self._cache_in_background([remote.data])
            return Success(self.mapper.to_domain(remote.data))

        local = self.local.fetch_one(user_id)
        if isinstance(local, Success):
            self._log.info("get_one[%s]: remote unavailable, served from local cache", user_id)
            return Success(self.mapper.to_domain(local.data))
        return self._lift(remote)

    def get_all(self) -> Outcome[List[User]]:
        remote = self.remote.fetch_all()
        if isinstance(remote, Success):
            self._cache_in_background(remote.data)
            return Success(self.mapper.to_domain_list(remote.data))

        local = self.local.fetch_all()
        if isinstance(local, Success):
            self._log.info("get_all: remote unavailable, served %d users from local cache", len(local.data))
            return Success(self.mapper.to_domain_list(local.data))
        return self._lift(remote)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def save(self, user: User) -> Outcome[bool]:
        if user.id == UNASSIGNED_ID:
            return Error("User id must be assigned before saving.", ErrorCategory.VALIDATION)
        record = self.mapper.to_record(user)
        remote = self.remote.save(record)
        self._drain_cache_writes(f"save[{user.id}]")
        # the local copy is always written so the edit is visible offline
        local = self.local.save(record)
        return self._either(remote, local, f"save[{user.id}]")

    def delete(self, user_id: UserId) -> Outcome[bool]:
        remote = self.remote.delete(user_id)
        self._drain_cache_writes(f"delete[{user_id}]")
        local = self.local.delete(user_id)
        return self._either(remote, local, f"delete[{user_id}]")

    def wait_for_cache_writes(self, timeout: Optional[float] = None) -> bool:
        """Block until pending write-through tasks finish, where the runner allows it."""
        join = getattr(self.runner, "join", None)
        if join is None:
            return True
        return bool(join(timeout))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _either(self, remote: Outcome[bool], local: Outcome[bool], ctx: str) -> Outcome[bool]:
        if isinstance(remote, Success) or isinstance(local, Success):
            if not isinstance(remote, Success):
                self._log.info("%s: remote failed, applied locally only", ctx)
            return Success(True)
        if isinstance(remote, Error):
            return self._lift(remote)
        if isinstance(local, Error):
            return self._lift(local)
        return Error("Unknown error", ErrorCategory.UNKNOWN)

    def _lift(self, outcome: Outcome[Any]) -> Error:
        """Re-classify a data-source failure into its domain category."""
        if not isinstance(outcome, Error):
            return Error("Unknown error", ErrorCategory.UNKNOWN)
        cause = outcome.cause
        if isinstance(cause, (FailureDetail, LocalFailure)):
            return Error(outcome.message, to_domain_error(cause).category, cause)
        return outcome

    def _drain_cache_writes(self, ctx: str) -> None:
        # a pending write-through must not land after this write and undo it
        if not self.wait_for_cache_writes(timeout=_CACHE_DRAIN_TIMEOUT_S):
            self._log.warning("%s: cache write-through still running, local copy may be stale", ctx)

    def _cache_in_background(self, records: Iterable[UserRecord]) -> None:
        if not self.write_through:
            return
        batch = list(records)
        if batch:
            self.runner.spawn(self._write_through, batch, name="write-through")

    def _write_through(self, records: List[UserRecord]) -> None:
        for record in records:
            try:
                result = self.local.save(record)
            except Exception:
                self._log.warning("cache write for user %s raised", record.id, exc_info=True)
                continue
            if isinstance(result, Error):
                self._log.debug("cache write for user %s skipped: %s", record.id, result.message)


__all__ = ["CachedUserRepository"]
