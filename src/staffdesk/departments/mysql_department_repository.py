from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import DepartmentSort, SortOrder
from ..database.connection import DatabaseConnection
from ..database.mysql_base import constraint_guard, db_cursor, fetchall, fetchone, like_escape
from .model import Department, DepartmentFilter
from .repository import DepartmentRepository

_SORT_COLUMNS = {
    DepartmentSort.CREATED_AT: "created_at",
    DepartmentSort.NAME: "name",
}

_DUPLICATE = "Department name already exists"


def _row_to_department(row: Dict[str, Any]) -> Department:
    return Department(
        department_id=row["department_id"],
        name=row["name"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, department_id: str, name: str, now: datetime) -> Department:
        with constraint_guard(duplicate=_DUPLICATE), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO departments(department_id, name, created_at, updated_at) VALUES(%s,%s,%s,%s)",
                (department_id, name, now, now),
            )
        return Department(department_id=department_id, name=name, created_at=now, updated_at=now)

    def get_by_id(self, department_id: str) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT department_id, name, created_at, updated_at FROM departments WHERE department_id=%s",
                (department_id,),
            )
            row = fetchone(cur)
            return _row_to_department(row) if row else None

    def list(self, query: DepartmentFilter) -> Sequence[Department]:
        where = ""
        params: list[Any] = []
        if query.name:
            where = "WHERE name LIKE %s"
            params.append(f"%{like_escape(query.name)}%")

        direction = "ASC" if query.order == SortOrder.ASC else "DESC"
        order_by = f"{_SORT_COLUMNS[query.sort_by]} {direction}, department_id {direction}"
        params += [query.page.limit, query.page.offset]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT department_id, name, created_at, updated_at
                FROM departments
                {where}
                ORDER BY {order_by}
                LIMIT %s OFFSET %s
                """,
                tuple(params),
            )
            return [_row_to_department(r) for r in fetchall(cur)]

    def update(self, department_id: str, *, name: str, now: datetime) -> bool:
        with constraint_guard(duplicate=_DUPLICATE), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE departments SET name=%s, updated_at=%s WHERE department_id=%s",
                (name, now, department_id),
            )
            return cur.rowcount > 0

    def delete(self, department_id: str) -> bool:
        with constraint_guard(referenced="Department still contains employees"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE department_id=%s", (department_id,))
            return cur.rowcount > 0
