# Overview: User directory and password checks for role-based login.

"""
Authentication Service

The POS has three fixed roles (admin, cashier, kitchen). Accounts live in an
in-memory directory built at startup, either from POS_USERS (JSON with
bcrypt hashes) or from the built-in demo accounts.

Passwords are only ever compared through bcrypt; plaintext is never stored.
"""

from __future__ import annotations

import json
from typing import Iterable

import bcrypt

from ..models import ROLES, User
from ..validation import ValidationError

# Demo accounts: (id, username, password, role)
DEFAULT_ACCOUNTS = (
    (1, "admin", "admin123", "admin"),
    (2, "cashier", "cashier123", "cashier"),
    (3, "kitchen", "kitchen123", "kitchen"),
)


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash password with bcrypt; returns the encoded hash as text."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in configuration
        return False


class UserDirectory:
    def __init__(self, users: Iterable[User]) -> None:
        self._by_id: dict[int, User] = {}
        self._by_username: dict[str, User] = {}
        for user in users:
            if user.role not in ROLES:
                raise ValidationError(f"Unknown role for {user.username}: {user.role}")
            if user.username in self._by_username:
                raise ValidationError(f"Duplicate username: {user.username}")
            self._by_id[user.id] = user
            self._by_username[user.username] = user

    @classmethod
    def from_config(cls, raw_users: str | None, *, rounds: int = 12) -> UserDirectory:
        """
        Build from POS_USERS JSON:
            [{"id": 1, "username": "admin", "role": "admin", "password_hash": "$2b$..."}]
        Empty -> demo accounts hashed at startup.
        """
        if not raw_users:
            return cls(
                User(id=uid, username=name, role=role, password_hash=hash_password(pw, rounds))
                for uid, name, pw, role in DEFAULT_ACCOUNTS
            )

        try:
            records = json.loads(raw_users)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"POS_USERS is not valid JSON: {exc}")
        if not isinstance(records, list):
            raise ValidationError("POS_USERS must be a JSON list")

        users = []
        for record in records:
            try:
                users.append(User(
                    id=int(record["id"]),
                    username=str(record["username"]),
                    role=str(record["role"]),
                    password_hash=str(record["password_hash"]),
                ))
            except (KeyError, TypeError, ValueError):
                raise ValidationError("POS_USERS entries need id, username, role and password_hash")
        return cls(users)

    def authenticate(self, username: str, password: str, role: str) -> User | None:
        """Return the user when username, password and role all match."""
        user = self._by_username.get(username)
        if user is None or user.role != role:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def get(self, user_id: int) -> User | None:
        return self._by_id.get(user_id)

    def list_all(self) -> list[User]:
        return sorted(self._by_id.values(), key=lambda u: u.id)
