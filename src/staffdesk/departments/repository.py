from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Department, DepartmentFilter


class DepartmentRepository(Protocol):
    """Department persistence.

    Writes are optimistic: ``create``/``update`` raise ConflictError on a
    duplicate name and ``delete`` raises ConflictError while employees
    still reference the department.
    """

    def create(self, *, department_id: str, name: str, now: datetime) -> Department:
        raise NotImplementedError

    def get_by_id(self, department_id: str) -> Optional[Department]:
        raise NotImplementedError

    def list(self, query: DepartmentFilter) -> Sequence[Department]:
        raise NotImplementedError

    def update(self, department_id: str, *, name: str, now: datetime) -> bool:
        raise NotImplementedError

    def delete(self, department_id: str) -> bool:
        raise NotImplementedError
