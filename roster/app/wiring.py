"""Explicit construction of the user data layer.

``build_services`` is called once at startup; the returned bundle is passed
down to view models by reference instead of being looked up globally.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..adapters.mappers import UserMapper, UserWireMapper
from ..adapters.user_local import UserLocalSource
from ..adapters.user_repository import CachedUserRepository
from ..adapters.user_rest import UserRestSource
from ..domain.ports import TaskRunner, UserDataSource
from ..usecases import DeleteUser, GetAllUsers, GetUserById, SaveUser
from ..viewmodels.user_detail_vm import UserDetailVM
from ..viewmodels.user_list_vm import UserListVM
from .settings import ClientConfig


@dataclass(frozen=True)
class UserServices:
    repository: CachedUserRepository
    get_user: GetUserById
    get_all_users: GetAllUsers
    save_user: SaveUser
    delete_user: DeleteUser

    def user_list_vm(self) -> UserListVM:
        return UserListVM(self.get_all_users)

    def user_detail_vm(self) -> UserDetailVM:
        return UserDetailVM(self.get_user, self.save_user, self.delete_user)


def build_services(
    config: Optional[ClientConfig] = None,
    *,
    remote: Optional[UserDataSource] = None,
    local: Optional[UserDataSource] = None,
    runner: Optional[TaskRunner] = None,
) -> UserServices:
    """Build mappers, data sources, repository and use cases.

    ``remote``/``local``/``runner`` replace the default collaborators, which
    is how tests and offline demos swap in ``UserRestMock`` or an inline runner.
    """
    cfg = config or ClientConfig()
    log = logging.getLogger(__name__)

    if remote is None:
        remote = UserRestSource(
            cfg.api_base_url,
            api_key=cfg.api_key,
            request_timeout_s=cfg.request_timeout_s,
            retries=cfg.retries,
            mapper=UserWireMapper(),
        )
        log.debug("Remote user source at %s", cfg.api_base_url)
    repository = CachedUserRepository(
        local=local if local is not None else UserLocalSource(),
        remote=remote,
        mapper=UserMapper(),
        runner=runner,
        write_through=cfg.write_through,
    )
    return UserServices(
        repository=repository,
        get_user=GetUserById(repository),
        get_all_users=GetAllUsers(repository),
        save_user=SaveUser(repository),
        delete_user=DeleteUser(repository),
    )


__all__ = ["UserServices", "build_services"]
