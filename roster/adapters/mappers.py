"""Translation between wire payloads, storage records, and domain users.

``UserRecord`` is what data sources exchange. ``UserWire`` mirrors the API
JSON and carries the legacy ``username`` field, which the domain never sees
and which is always sent back empty.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping

from roster.domain.entities import User, UserId, UserRecord


class MalformedPayloadError(ValueError):
    """Response body decoded but does not have the expected shape."""


@dataclass(frozen=True)
class UserWire:
    id: UserId
    name: str
    email: str
    username: str = ""

    @classmethod
    def from_json(cls, payload: Any) -> "UserWire":
        if not isinstance(payload, Mapping):
            raise MalformedPayloadError(
                f"expected user object, got {type(payload).__name__}"
            )
        user_id = payload.get("id")
        # bool is an int subclass; reject it explicitly
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise MalformedPayloadError(f"user id must be an integer, got {user_id!r}")
        name = payload.get("name")
        email = payload.get("email")
        if not isinstance(name, str) or not isinstance(email, str):
            raise MalformedPayloadError(f"user {user_id}: name and email must be strings")
        username = payload.get("username")
        return cls(
            id=user_id,
            name=name,
            email=email,
            username=username if isinstance(username, str) else "",
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "username": self.username,
        }


class UserMapper:
    """Stateless mapping between ``UserRecord`` and ``User``."""

    @staticmethod
    def to_domain(record: UserRecord) -> User:
        return User(id=record.id, name=record.name, email=record.email)

    @staticmethod
    def to_record(user: User) -> UserRecord:
        return UserRecord(id=user.id, name=user.name, email=user.email)

    def to_domain_list(self, records: Iterable[UserRecord]) -> List[User]:
        return [self.to_domain(record) for record in records]


class UserWireMapper:
    """Stateless mapping between ``UserWire`` and ``UserRecord``."""

    @staticmethod
    def to_record(wire: UserWire) -> UserRecord:
        return UserRecord(id=wire.id, name=wire.name, email=wire.email)

    @staticmethod
    def to_wire(record: UserRecord) -> UserWire:
        return UserWire(id=record.id, name=record.name, email=record.email, username="")

    def parse_one(self, payload: Any) -> UserRecord:
        return self.to_record(UserWire.from_json(payload))

    def parse_many(self, payload: Any) -> List[UserRecord]:
        if not isinstance(payload, list):
            raise MalformedPayloadError(
                f"expected list of users, got {type(payload).__name__}"
            )
        return [self.parse_one(entry) for entry in payload]


__all__ = [
    "MalformedPayloadError",
    "UserMapper",
    "UserWire",
    "UserWireMapper",
]
