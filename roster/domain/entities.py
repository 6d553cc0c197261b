"""Domain value objects shared by adapters, use cases, and view models."""

from __future__ import annotations

from dataclasses import dataclass

UserId = int

UNASSIGNED_ID: UserId = -1
"""Identity sentinel for a user that has not been assigned an id yet."""


@dataclass(frozen=True)
class User:
    """A user as seen by the application; equality is structural."""

    id: UserId
    name: str
    email: str

    @property
    def is_unassigned(self) -> bool:
        return self.id == UNASSIGNED_ID


@dataclass(frozen=True)
class UserRecord:
    """Storage shape exchanged by data sources; mapped to ``User`` by the repository."""

    id: UserId
    name: str
    email: str


__all__ = ["UNASSIGNED_ID", "User", "UserId", "UserRecord"]
