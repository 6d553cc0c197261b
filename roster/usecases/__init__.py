"""Use-case layer: one callable per user action.

Each use case forwards to exactly one repository method and returns its
``Outcome`` unchanged, so view models depend on a narrow, purpose-named
operation rather than the whole repository contract.
"""

from .delete_user import DeleteUser
from .get_all_users import GetAllUsers
from .get_user_by_id import GetUserById
from .save_user import SaveUser

__all__ = ["DeleteUser", "GetAllUsers", "GetUserById", "SaveUser"]
