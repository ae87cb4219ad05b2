from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Sequence

from ..core.enums import EmployeeSort, Gender, SortOrder
from ..database.connection import DatabaseConnection
from ..database.mysql_base import constraint_guard, db_cursor, fetchall, fetchone, like_escape
from .model import EMPLOYEE_COLUMNS, Employee, EmployeeFilter, NewEmployee
from .repository import EmployeeRepository

_SELECT = """
    SELECT e.employee_id, e.identity_number, e.name, e.gender, e.department_id,
           e.employee_image_uri, e.created_at, e.updated_at,
           d.name AS department_name
    FROM employees e
    JOIN departments d ON d.department_id = e.department_id
"""

_SORT_COLUMNS = {
    EmployeeSort.CREATED_AT: "e.created_at",
    EmployeeSort.NAME: "e.name",
    EmployeeSort.IDENTITY_NUMBER: "e.identity_number",
}

_WRITE_ERRORS = dict(
    duplicate="Identity number already exists",
    missing_parent="Department not found",
)


def _row_to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=row["employee_id"],
        identity_number=row["identity_number"],
        name=row["name"],
        gender=Gender(row["gender"]),
        department_id=row["department_id"],
        employee_image_uri=row.get("employee_image_uri"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        department_name=row.get("department_name"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, employee_id: str, employee: NewEmployee, now: datetime) -> Employee:
        with constraint_guard(**_WRITE_ERRORS), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(employee_id, identity_number, name, employee_image_uri,
                                      gender, department_id, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee_id,
                    employee.identity_number,
                    employee.name,
                    employee.employee_image_uri,
                    employee.gender.value,
                    employee.department_id,
                    now,
                    now,
                ),
            )
            cur.execute(f"{_SELECT} WHERE e.employee_id=%s", (employee_id,))
            return _row_to_employee(fetchone(cur))

    def get_by_identity_number(self, identity_number: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE e.identity_number=%s", (identity_number,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def list(self, query: EmployeeFilter) -> Sequence[Employee]:
        clauses: list[str] = []
        params: list[Any] = []
        if query.identity_number:
            clauses.append("e.identity_number LIKE %s")
            params.append(f"{like_escape(query.identity_number)}%")
        if query.name:
            clauses.append("e.name LIKE %s")
            params.append(f"%{like_escape(query.name)}%")
        if query.department_id:
            clauses.append("e.department_id = %s")
            params.append(query.department_id)
        if query.gender:
            clauses.append("e.gender = %s")
            params.append(query.gender.value)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        direction = "ASC" if query.order == SortOrder.ASC else "DESC"
        order_by = f"{_SORT_COLUMNS[query.sort_by]} {direction}, e.employee_id {direction}"
        params += [query.page.limit, query.page.offset]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where} ORDER BY {order_by} LIMIT %s OFFSET %s", tuple(params))
            return [_row_to_employee(r) for r in fetchall(cur)]

    def update(self, identity_number: str, changes: Mapping[str, Any], *, now: datetime) -> bool:
        cols = [c for c in EMPLOYEE_COLUMNS if c in changes]
        values = [changes[c].value if isinstance(changes[c], Gender) else changes[c] for c in cols]
        assignments = ", ".join(f"{c}=%s" for c in cols + ["updated_at"])
        with constraint_guard(**_WRITE_ERRORS), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE employees SET {assignments} WHERE identity_number=%s",
                tuple(values + [now, identity_number]),
            )
            return cur.rowcount > 0

    def delete(self, identity_number: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE identity_number=%s", (identity_number,))
            return cur.rowcount > 0
