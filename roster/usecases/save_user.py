from __future__ import annotations

from dataclasses import dataclass

from ..domain.entities import User
from ..domain.outcome import Outcome
from ..domain.ports import UserRepository


@dataclass
class SaveUser:
    """Create or update a user; succeeds when either source accepted it."""

    repository: UserRepository

    def __call__(self, user: User) -> Outcome[bool]:
        return self.repository.save(user)
