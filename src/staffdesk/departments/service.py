from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from ..auth.policy import Identity, authorize_directory
from ..common.datetime_utils import utcnow
from ..common.pagination import Page, read_page_request
from ..common.validators import PayloadValidator
from ..core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, NAME_MAX_LEN, NAME_MIN_LEN
from ..core.enums import DepartmentSort, SortOrder
from ..core.exceptions import NotFoundError
from .model import Department, DepartmentFilter
from .repository import DepartmentRepository

logger = logging.getLogger(__name__)


def normalize_id(value: str) -> Optional[str]:
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        return None


class DepartmentService:
    """Use cases for departments, shared by every authenticated manager."""

    def __init__(
        self,
        departments: DepartmentRepository,
        *,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._departments = departments
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size
        self._clock = clock

    def create_department(self, *, identity: Optional[Identity], payload: Optional[Mapping[str, Any]]) -> Department:
        authorize_directory(identity)
        v = PayloadValidator(payload)
        name = v.string("name", min_len=NAME_MIN_LEN, max_len=NAME_MAX_LEN)
        v.done()

        department = self._departments.create(department_id=str(uuid.uuid4()), name=name, now=self._clock())
        logger.info("Department %s created by %s", department.department_id, identity.user_id)
        return department

    def list_departments(self, *, identity: Optional[Identity], params: Optional[Mapping[str, Any]]) -> Page[Department]:
        authorize_directory(identity)
        v = PayloadValidator(params)
        name = v.string("name", required=False)
        sort_by = v.choice("sortBy", DepartmentSort, required=False, default=DepartmentSort.CREATED_AT)
        default_order = SortOrder.DESC if sort_by == DepartmentSort.CREATED_AT else SortOrder.ASC
        order = v.choice("order", SortOrder, required=False, default=default_order)
        page = read_page_request(v, default_size=self._default_page_size, max_size=self._max_page_size)
        v.done()

        items = self._departments.list(DepartmentFilter(name=name, sort_by=sort_by, order=order, page=page))
        return Page(items=list(items), limit=page.limit, offset=page.offset)

    def get_department(self, *, identity: Optional[Identity], department_id: str) -> Department:
        authorize_directory(identity)
        key = normalize_id(department_id)
        department = self._departments.get_by_id(key) if key else None
        if not department:
            raise NotFoundError("Department not found")
        return department

    def update_department(
        self,
        *,
        identity: Optional[Identity],
        department_id: str,
        payload: Optional[Mapping[str, Any]],
    ) -> Department:
        authorize_directory(identity)
        v = PayloadValidator(payload)
        name = v.string("name", min_len=NAME_MIN_LEN, max_len=NAME_MAX_LEN)
        v.done()

        key = normalize_id(department_id)
        if not key or not self._departments.update(key, name=name, now=self._clock()):
            raise NotFoundError("Department not found")
        return self.get_department(identity=identity, department_id=key)

    def delete_department(self, *, identity: Optional[Identity], department_id: str) -> None:
        authorize_directory(identity)
        key = normalize_id(department_id)
        if not key or not self._departments.delete(key):
            raise NotFoundError("Department not found")
        logger.info("Department %s deleted by %s", key, identity.user_id)
