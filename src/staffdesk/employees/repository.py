from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Employee, EmployeeFilter, NewEmployee


class EmployeeRepository(Protocol):
    """Employee persistence.

    ``create`` and ``update`` raise ConflictError when the identity number
    is taken and NotFoundError when the department does not exist. Nothing
    is written in either case.
    """

    def create(self, *, employee_id: str, employee: NewEmployee, now: datetime) -> Employee:
        raise NotImplementedError

    def get_by_identity_number(self, identity_number: str) -> Optional[Employee]:
        raise NotImplementedError

    def list(self, query: EmployeeFilter) -> Sequence[Employee]:
        raise NotImplementedError

    def update(self, identity_number: str, changes: Mapping[str, Any], *, now: datetime) -> bool:
        raise NotImplementedError

    def delete(self, identity_number: str) -> bool:
        raise NotImplementedError
