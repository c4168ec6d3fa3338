"""User accounts with salted password hashes and role lists."""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional

log = logging.getLogger(__name__)

_SCHEME = "scrypt"
_N = 2**14
_R = 8
_P = 1
_SALT_SIZE = 16
_HASH_SIZE = 32


class UserAlreadyExists(Exception):
    """Raised when creating a user whose name is taken."""

    def __init__(self, username: str) -> None:
        super().__init__(f"User already exists: {username}")
        self.username = username


class UserNotFound(LookupError):
    """Raised when a username is unknown."""

    def __init__(self, username: str) -> None:
        super().__init__(f"User not found: {username}")
        self.username = username


class AuthenticationFailed(Exception):
    """Raised when credentials are rejected."""


@dataclass
class User:
    """A database user."""

    username: str
    password_hash: str
    roles: list[str] = field(default_factory=list)
    databases: list[str] = field(default_factory=lambda: ["*"])
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_login: Optional[datetime] = None
    enabled: bool = True


def _b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii").rstrip("=")


def _unb64(text: str) -> bytes:
    return base64.b64decode(text + "=" * (-len(text) % 4))


def _hash_password(secret: str) -> str:
    salt = os.urandom(_SALT_SIZE)
    digest = hashlib.scrypt(
        secret.encode("utf-8"), salt=salt, n=_N, r=_R, p=_P, dklen=_HASH_SIZE
    )
    return f"${_SCHEME}$n={_N},r={_R},p={_P}${_b64(salt)}${_b64(digest)}"


def _verify_password(encoded: str, secret: str) -> bool:
    try:
        _, scheme, params, salt_text, digest_text = encoded.split("$")
        if scheme != _SCHEME:
            raise ValueError(f"unknown scheme {scheme!r}")
        values = dict(item.split("=", 1) for item in params.split(","))
        n, r, p = int(values["n"]), int(values["r"]), int(values["p"])
        salt = _unb64(salt_text)
        expected = _unb64(digest_text)
    except (ValueError, KeyError) as exc:
        raise ValueError(f"Password verification failed: {exc}") from exc
    actual = hashlib.scrypt(
        secret.encode("utf-8"), salt=salt, n=n, r=r, p=p, dklen=len(expected)
    )
    return hmac.compare_digest(actual, expected)


class UserManager:
    """Creates, authenticates and manages users."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def create_user(self, username: str, password: str, roles: Iterable[str]) -> None:
        """Create a user with a salted hash of the password."""
        if username in self._users:
            raise UserAlreadyExists(username)
        self._users[username] = User(
            username=username,
            password_hash=_hash_password(password),
            roles=list(roles),
        )
        log.info("User created: %s", username)

    def authenticate(self, username: str, password: str) -> User:
        """Check credentials, record the login time and return the user."""
        user = self.get_user(username)
        if not user.enabled:
            raise AuthenticationFailed("User account is disabled")
        if not _verify_password(user.password_hash, password):
            raise AuthenticationFailed("Invalid password")
        user.last_login = datetime.now(timezone.utc)
        return user

    def delete_user(self, username: str) -> None:
        """Remove a user."""
        if self._users.pop(username, None) is None:
            raise UserNotFound(username)

    def list_users(self) -> list[User]:
        """All users."""
        return list(self._users.values())

    def get_user(self, username: str) -> User:
        """The user with this name."""
        try:
            return self._users[username]
        except KeyError:
            raise UserNotFound(username) from None

    def grant_role(self, username: str, role: str) -> None:
        """Add a role to a user unless already held."""
        user = self.get_user(username)
        if role not in user.roles:
            user.roles.append(role)

    def revoke_role(self, username: str, role: str) -> None:
        """Remove every occurrence of a role from a user."""
        user = self.get_user(username)
        user.roles = [r for r in user.roles if r != role]