from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.pagination import PageRequest
from ..core.enums import EmployeeSort, Gender, SortOrder


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee listed in the shared directory."""

    employee_id: str
    identity_number: str
    name: str
    gender: Gender
    department_id: str
    employee_image_uri: Optional[str]
    created_at: datetime
    updated_at: datetime
    # read-model extra, filled by joins
    department_name: Optional[str] = None


@dataclass(frozen=True)
class NewEmployee:
    identity_number: str
    name: str
    gender: Gender
    department_id: str
    employee_image_uri: Optional[str] = None


@dataclass(frozen=True)
class EmployeeFilter:
    identity_number: Optional[str] = None
    name: Optional[str] = None
    department_id: Optional[str] = None
    gender: Optional[Gender] = None
    sort_by: EmployeeSort = EmployeeSort.CREATED_AT
    order: SortOrder = SortOrder.DESC
    page: PageRequest = field(default_factory=PageRequest)


# columns an update may touch
EMPLOYEE_COLUMNS = ("identity_number", "name", "gender", "department_id", "employee_image_uri")
