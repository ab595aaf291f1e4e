from __future__ import annotations

from typing import Any, Optional

from ..core.enums import UserType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository

_SELECT_USER = """
    SELECT user_id, firstname, lastname, username, password_hash, user_type, grade, section, is_active
    FROM users
"""


def _row_to_user(row: dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        firstname=row["firstname"],
        lastname=row["lastname"],
        username=row["username"],
        password_hash=row["password_hash"],
        user_type=UserType(int(row["user_type"])),
        grade=row.get("grade"),
        section=row.get("section"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_USER + " WHERE username=%s", (username,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None
