"""
Role-based authorization.

Every permission rule of the API lives in one decision table, evaluated by
the pure function `decide`. It has no access to storage or the request:
callers pass the role of the current user (or None when no user could be
resolved) and, for task status updates, whether that user is the assignee.
"""
import enum
from typing import Dict, FrozenSet, Optional

from app.errors import Forbidden, Unauthorized
from app.logger import get_logger
from models.user import Role, User

logger = get_logger(__name__)


class Operation(str, enum.Enum):
    READ = "read"
    CREATE_TEAM = "create_team"
    UPDATE_TEAM = "update_team"
    DELETE_TEAM = "delete_team"
    CREATE_USER = "create_user"
    UPDATE_USER = "update_user"
    DELETE_USER = "delete_user"
    CREATE_TASK = "create_task"
    UPDATE_TASK = "update_task"
    UPDATE_TASK_STATUS = "update_task_status"
    DELETE_TASK = "delete_task"


class Decision(str, enum.Enum):
    ALLOW = "allow"
    FORBIDDEN = "forbidden"
    UNAUTHENTICATED = "unauthenticated"


_ALL_ROLES = frozenset(Role)
_ADMIN = frozenset({Role.ADMIN})
_ADMIN_OR_MANAGE = frozenset({Role.ADMIN, Role.MANAGE})

# Roles allowed unconditionally
PERMISSIONS: Dict[Operation, FrozenSet[Role]] = {
    Operation.READ: _ALL_ROLES,
    Operation.CREATE_TEAM: _ADMIN,
    Operation.UPDATE_TEAM: _ADMIN,
    Operation.DELETE_TEAM: _ADMIN,
    Operation.CREATE_USER: _ADMIN,
    Operation.UPDATE_USER: _ADMIN,
    Operation.DELETE_USER: _ADMIN,
    Operation.CREATE_TASK: _ADMIN_OR_MANAGE,
    Operation.UPDATE_TASK: _ADMIN_OR_MANAGE,
    Operation.UPDATE_TASK_STATUS: _ADMIN_OR_MANAGE,
    Operation.DELETE_TASK: _ADMIN,
}

# Roles allowed only when the requester is the task's assignee
ASSIGNEE_PERMISSIONS: Dict[Operation, FrozenSet[Role]] = {
    Operation.UPDATE_TASK_STATUS: frozenset({Role.EMPLOYEE}),
}


def decide(role: Optional[Role], operation: Operation, is_assignee: bool = False) -> Decision:
    if role is None:
        return Decision.UNAUTHENTICATED
    if role in PERMISSIONS[operation]:
        return Decision.ALLOW
    if is_assignee and role in ASSIGNEE_PERMISSIONS.get(operation, frozenset()):
        return Decision.ALLOW
    return Decision.FORBIDDEN


def authorize(user: Optional[User], operation: Operation, is_assignee: bool = False) -> User:
    """
    Apply `decide` to the current user.

    Returns the user when allowed so callers can write
    `current = authorize(current_user, Operation.CREATE_TASK)`.

    Raises:
        Unauthorized: no current user
        Forbidden: the role may not perform the operation
    """
    decision = decide(user.role if user is not None else None, operation, is_assignee)
    if decision is Decision.UNAUTHENTICATED:
        raise Unauthorized()
    if decision is Decision.FORBIDDEN:
        logger.info(f"Denied {operation.value} for user {user.id} ({user.role.value})")
        raise Forbidden()
    return user
