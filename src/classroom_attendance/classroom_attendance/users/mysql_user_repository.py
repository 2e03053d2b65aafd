from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.enums import Role
from ..database.mysql_base import Store, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "user_id, username, password_hash, role, first_name, last_name, email, last_login"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        email=row.get("email"),
        last_login=row.get("last_login"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, store: Store):
        self._store = store

    def get_by_username(self, username: str) -> Optional[User]:
        with self._store.transaction() as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def touch_last_login(self, user_id: int, *, at: datetime) -> bool:
        with self._store.transaction() as (_, cur):
            cur.execute("UPDATE users SET last_login=%s WHERE user_id=%s", (at, int(user_id)))
            return cur.rowcount > 0
