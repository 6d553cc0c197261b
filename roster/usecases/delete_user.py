from __future__ import annotations

from dataclasses import dataclass

from ..domain.entities import UserId
from ..domain.outcome import Outcome
from ..domain.ports import UserRepository


@dataclass
class DeleteUser:
    repository: UserRepository

    def __call__(self, user_id: UserId) -> Outcome[bool]:
        return self.repository.delete(user_id)
