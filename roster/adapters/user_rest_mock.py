from __future__ import annotations

import socket
import threading
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from roster.domain.entities import UNASSIGNED_ID, UserId, UserRecord
from roster.domain.errors import (
    ClientFailure,
    ErrorBody,
    FailureDetail,
    NoConnectivity,
    ParseFailure,
    ServerFailure,
    Timeout,
    UnresolvedHost,
    to_domain_error,
)
from roster.domain.outcome import Error, ErrorCategory, Outcome, Success
from roster.domain.ports import UserDataSource

from .mappers import UserWire, UserWireMapper


@dataclass
class UserRestMock(UserDataSource):
    """Offline substitute for ``UserRestSource`` with deterministic responses.

    Holds wire records in memory and answers like the REST API would. Failures
    can be injected for the next call only (``fail_next``) or for every call
    (``fail_always``) to exercise fallback paths without a network.
    """

    users: Dict[UserId, UserWire] = field(default_factory=dict)
    mapper: UserWireMapper = field(default_factory=UserWireMapper)

    def __post_init__(self) -> None:
        self._lock = threading.Lock()
        self._next_failure: Optional[FailureDetail] = None
        self._sticky_failure: Optional[FailureDetail] = None
        self.calls: List[str] = []

    @classmethod
    def with_records(cls, records: Iterable[UserRecord]) -> "UserRestMock":
        mock = cls()
        for record in records:
            mock.users[record.id] = UserWireMapper.to_wire(record)
        return mock

    # ---------- failure injection ----------

    def fail_next(self, detail: FailureDetail) -> None:
        with self._lock:
            self._next_failure = detail

    def fail_always(self, detail: Optional[FailureDetail]) -> None:
        """Fail every call with ``detail``; ``None`` restores normal answers."""
        with self._lock:
            self._sticky_failure = detail

    # ---------- UserDataSource ----------

    def fetch_one(self, user_id: UserId) -> Outcome[UserRecord]:
        failure = self._take_failure(f"fetch_one:{user_id}")
        if failure is not None:
            return failure
        with self._lock:
            wire = self.users.get(user_id)
        if wire is None:
            return _as_error(simulate_client_error(404, "Not found"))
        return Success(self.mapper.to_record(wire))

    def fetch_all(self) -> Outcome[List[UserRecord]]:
        failure = self._take_failure("fetch_all")
        if failure is not None:
            return failure
        with self._lock:
            wires = list(self.users.values())
        return Success([self.mapper.to_record(wire) for wire in wires])

    def save(self, record: UserRecord) -> Outcome[bool]:
        if record.id == UNASSIGNED_ID:
            return Error("User id must be assigned before saving.", ErrorCategory.VALIDATION)
        failure = self._take_failure(f"save:{record.id}")
        if failure is not None:
            return failure
        with self._lock:
            self.users[record.id] = self.mapper.to_wire(record)
        return Success(True)

    def delete(self, user_id: UserId) -> Outcome[bool]:
        failure = self._take_failure(f"delete:{user_id}")
        if failure is not None:
            return failure
        with self._lock:
            removed = self.users.pop(user_id, None)
        if removed is None:
            return _as_error(simulate_client_error(404, "Not found"))
        return Success(True)

    def _take_failure(self, call: str) -> Optional[Error]:
        with self._lock:
            self.calls.append(call)
            detail = self._next_failure or self._sticky_failure
            self._next_failure = None
        return _as_error(detail) if detail is not None else None


def _as_error(detail: FailureDetail) -> Error:
    return Error(detail.user_message(), to_domain_error(detail).category, detail)


# ---- Failure simulation helpers ----

def simulate_no_connectivity() -> FailureDetail:
    return NoConnectivity(ConnectionError("No internet connection"))


def simulate_timeout() -> FailureDetail:
    return Timeout(TimeoutError("Connection timed out"))


def simulate_unknown_host(host: str = "api.example.com") -> FailureDetail:
    return UnresolvedHost(socket.gaierror(f"Unknown host: {host}"))


def simulate_client_error(status: int = 400, message: str = "Bad Request") -> FailureDetail:
    body = ErrorBody(
        message=message,
        technical_message=f"Client error occurred with status code: {status}",
        error_code=f"E{status}",
    )
    return ClientFailure(status, body)


def simulate_server_error(status: int = 500, message: str = "Internal Server Error") -> FailureDetail:
    body = ErrorBody(
        message=message,
        technical_message=f"Server error occurred with status code: {status}",
        error_code=f"E{status}",
    )
    return ServerFailure(status, body)


def simulate_validation_error(field_errors: Optional[Mapping[str, str]] = None) -> FailureDetail:
    errors = dict(field_errors) if field_errors is not None else {
        "email": "Invalid email format",
        "name": "Name must not be empty",
    }
    body = ErrorBody(
        message="Validation failed",
        technical_message="One or more fields failed validation",
        error_code="E422",
        field_errors=errors,
    )
    return ClientFailure(422, body)


def simulate_parse_error() -> FailureDetail:
    return ParseFailure("Failed to parse response")


__all__ = [
    "UserRestMock",
    "simulate_client_error",
    "simulate_no_connectivity",
    "simulate_parse_error",
    "simulate_server_error",
    "simulate_timeout",
    "simulate_unknown_host",
    "simulate_validation_error",
]
