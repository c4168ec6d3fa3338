"""Role-based access control."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Optional


class Action(enum.Enum):
    """Actions that can be authorized."""

    READ = "Read"
    WRITE = "Write"
    DELETE = "Delete"
    CREATE_COLLECTION = "CreateCollection"
    DROP_COLLECTION = "DropCollection"
    CREATE_INDEX = "CreateIndex"
    DROP_INDEX = "DropIndex"
    CREATE_USER = "CreateUser"
    DROP_USER = "DropUser"
    GRANT_ROLE = "GrantRole"
    ADMIN_OPS = "AdminOps"


@dataclass
class Role:
    """A named set of allowed actions."""

    name: str
    actions: list[Action] = field(default_factory=list)
    description: str = ""


class AuthorizationDenied(PermissionError):
    """Raised when none of a user's roles allows an action."""

    def __init__(self, user: str, action: str) -> None:
        super().__init__(f"Authorization denied: user '{user}' cannot perform {action}")
        self.user = user
        self.action = action


_DATA_ACTIONS = [Action.READ, Action.WRITE, Action.DELETE]
_DB_ADMIN_ACTIONS = _DATA_ACTIONS + [
    Action.CREATE_COLLECTION,
    Action.DROP_COLLECTION,
    Action.CREATE_INDEX,
    Action.DROP_INDEX,
]
_USER_ADMIN_ACTIONS = [Action.CREATE_USER, Action.DROP_USER, Action.GRANT_ROLE]


def _default_roles() -> list[Role]:
    return [
        Role("read", [Action.READ], "Read-only access"),
        Role("readWrite", list(_DATA_ACTIONS), "Read and write access"),
        Role("dbAdmin", list(_DB_ADMIN_ACTIONS), "Database administration"),
        Role("userAdmin", list(_USER_ADMIN_ACTIONS), "User administration"),
        Role(
            "root",
            _DB_ADMIN_ACTIONS + _USER_ADMIN_ACTIONS + [Action.ADMIN_OPS],
            "Superuser with all permissions",
        ),
    ]


class RbacManager:
    """Holds roles and checks whether role sets allow actions."""

    def __init__(self) -> None:
        self._roles: dict[str, Role] = {role.name: role for role in _default_roles()}

    def authorize(self, user_roles: Iterable[str], action: Action) -> None:
        """Return if any of the roles allows the action; raise AuthorizationDenied otherwise."""
        for role_name in user_roles:
            role = self._roles.get(role_name)
            if role is not None and action in role.actions:
                return
        raise AuthorizationDenied(user="unknown", action=Action(action).value)

    def create_role(self, name: str, actions: Iterable[Action], description: str) -> None:
        """Create or replace a role."""
        self._roles[name] = Role(name, list(actions), description)

    def list_roles(self) -> list[Role]:
        """All known roles."""
        return list(self._roles.values())

    def get_role(self, name: str) -> Optional[Role]:
        """The role with this name, or None."""
        return self._roles.get(name)