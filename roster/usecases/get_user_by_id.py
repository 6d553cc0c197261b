from __future__ import annotations

from dataclasses import dataclass

from ..domain.entities import User, UserId
from ..domain.outcome import Outcome
from ..domain.ports import UserRepository


@dataclass
class GetUserById:
    repository: UserRepository

    def __call__(self, user_id: UserId) -> Outcome[User]:
        return self.repository.get_one(user_id)
