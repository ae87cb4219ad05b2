from __future__ import annotations

from typing import Sequence

from ..common.pagination import PageRequest
from ..database.connection import DatabaseConnection
from ..database.mysql_base import constraint_guard, db_cursor, fetchall
from .model import StoredFile
from .repository import FileRepository


class MySQLFileRepository(FileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, stored: StoredFile) -> StoredFile:
        with constraint_guard(missing_parent="User not found"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO files(file_id, user_id, uri, content_type, size_bytes, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    stored.file_id,
                    stored.user_id,
                    stored.uri,
                    stored.content_type,
                    stored.size_bytes,
                    stored.created_at,
                ),
            )
        return stored

    def list_for_user(self, user_id: str, page: PageRequest) -> Sequence[StoredFile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT file_id, user_id, uri, content_type, size_bytes, created_at
                FROM files
                WHERE user_id=%s
                ORDER BY created_at DESC, file_id DESC
                LIMIT %s OFFSET %s
                """,
                (user_id, page.limit, page.offset),
            )
            return [
                StoredFile(
                    file_id=r["file_id"],
                    user_id=r["user_id"],
                    uri=r["uri"],
                    content_type=r["content_type"],
                    size_bytes=int(r["size_bytes"]),
                    created_at=r["created_at"],
                )
                for r in fetchall(cur)
            ]
