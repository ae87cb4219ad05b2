from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import constraint_guard, db_cursor, fetchone
from .model import PROFILE_COLUMNS, User
from .repository import UserRepository

_COLUMNS = """
    user_id, email, password_hash, name, user_image_uri,
    company_name, company_image_uri, created_at, updated_at
"""


def _row_to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=row["user_id"],
        email=row["email"],
        password_hash=row["password_hash"],
        name=row.get("name"),
        user_image_uri=row.get("user_image_uri"),
        company_name=row.get("company_name"),
        company_image_uri=row.get("company_image_uri"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email.lower(),))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(self, *, user_id: str, email: str, password_hash: str, now: datetime) -> User:
        with constraint_guard(duplicate="Email already exists"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(user_id, email, password_hash, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (user_id, email.lower(), password_hash, now, now),
            )
        return User(
            user_id=user_id,
            email=email.lower(),
            password_hash=password_hash,
            name=None,
            user_image_uri=None,
            company_name=None,
            company_image_uri=None,
            created_at=now,
            updated_at=now,
        )

    def update_profile(self, user_id: str, changes: Mapping[str, Optional[str]], *, now: datetime) -> bool:
        cols = [c for c in PROFILE_COLUMNS if c in changes]
        assignments = ", ".join(f"{c}=%s" for c in cols + ["updated_at"])
        params = [changes[c] for c in cols] + [now, user_id]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE users SET {assignments} WHERE user_id=%s", tuple(params))
            return cur.rowcount > 0
