from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..domain.entities import User
from ..domain.outcome import Outcome
from ..domain.ports import UserRepository


@dataclass
class GetAllUsers:
    repository: UserRepository

    def __call__(self) -> Outcome[List[User]]:
        return self.repository.get_all()
