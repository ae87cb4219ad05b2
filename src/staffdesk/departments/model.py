from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.pagination import PageRequest
from ..core.enums import DepartmentSort, SortOrder


@dataclass(frozen=True)
class Department:
    department_id: str
    name: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class DepartmentFilter:
    name: Optional[str] = None
    sort_by: DepartmentSort = DepartmentSort.CREATED_AT
    order: SortOrder = SortOrder.DESC
    page: PageRequest = field(default_factory=PageRequest)
