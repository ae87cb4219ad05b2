from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from ..auth.policy import Identity, authorize_directory
from ..common.datetime_utils import utcnow
from ..common.pagination import Page, read_page_request
from ..common.validators import PayloadValidator
from ..core.constants import (
    DEFAULT_PAGE_SIZE,
    IDENTITY_NUMBER_MAX_LEN,
    IDENTITY_NUMBER_MIN_LEN,
    MAX_PAGE_SIZE,
    NAME_MAX_LEN,
    NAME_MIN_LEN,
)
from ..core.enums import EmployeeSort, Gender, SortOrder
from ..core.exceptions import NotFoundError
from .model import Employee, EmployeeFilter, NewEmployee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def parse_new_employee(payload: Optional[Mapping[str, Any]]) -> NewEmployee:
    v = PayloadValidator(payload)
    identity_number = v.alphanumeric(
        "identityNumber", min_len=IDENTITY_NUMBER_MIN_LEN, max_len=IDENTITY_NUMBER_MAX_LEN
    )
    name = v.string("name", min_len=NAME_MIN_LEN, max_len=NAME_MAX_LEN)
    gender = v.choice("gender", Gender)
    department_id = v.uuid("departmentId")
    image = v.uri("employeeImageUri")
    v.done()
    return NewEmployee(
        identity_number=identity_number,
        name=name,
        gender=gender,
        department_id=department_id,
        employee_image_uri=image,
    )


def parse_employee_patch(payload: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Validate a PATCH body into column changes; only sent keys are kept."""
    v = PayloadValidator(payload)
    changes: dict[str, Any] = {}
    if v.has("identityNumber"):
        changes["identity_number"] = v.alphanumeric(
            "identityNumber", min_len=IDENTITY_NUMBER_MIN_LEN, max_len=IDENTITY_NUMBER_MAX_LEN
        )
    if v.has("name"):
        changes["name"] = v.string("name", min_len=NAME_MIN_LEN, max_len=NAME_MAX_LEN)
    if v.has("gender"):
        changes["gender"] = v.choice("gender", Gender)
    if v.has("departmentId"):
        changes["department_id"] = v.uuid("departmentId")
    if v.has("employeeImageUri"):
        changes["employee_image_uri"] = v.uri("employeeImageUri")

    if not v.errors and not changes:
        v.fail("", "at least one employee field is required")
    v.done()
    return changes


class EmployeeService:
    """Use cases for employees, shared by every authenticated manager."""

    def __init__(
        self,
        employees: EmployeeRepository,
        *,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._employees = employees
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size
        self._clock = clock

    def create_employee(self, *, identity: Optional[Identity], payload: Optional[Mapping[str, Any]]) -> Employee:
        authorize_directory(identity)
        new_employee = parse_new_employee(payload)
        employee = self._employees.create(employee_id=str(uuid.uuid4()), employee=new_employee, now=self._clock())
        logger.info("Employee %s created by %s", employee.employee_id, identity.user_id)
        return employee

    def list_employees(self, *, identity: Optional[Identity], params: Optional[Mapping[str, Any]]) -> Page[Employee]:
        authorize_directory(identity)
        v = PayloadValidator(params)
        sort_by = v.choice("sortBy", EmployeeSort, required=False, default=EmployeeSort.CREATED_AT)
        default_order = SortOrder.DESC if sort_by == EmployeeSort.CREATED_AT else SortOrder.ASC
        query = EmployeeFilter(
            identity_number=v.string("identityNumber", required=False),
            name=v.string("name", required=False),
            department_id=v.uuid("departmentId", required=False),
            gender=v.choice("gender", Gender, required=False),
            sort_by=sort_by,
            order=v.choice("order", SortOrder, required=False, default=default_order),
            page=read_page_request(v, default_size=self._default_page_size, max_size=self._max_page_size),
        )
        v.done()

        items = self._employees.list(query)
        return Page(items=list(items), limit=query.page.limit, offset=query.page.offset)

    def get_employee(self, *, identity: Optional[Identity], identity_number: str) -> Employee:
        authorize_directory(identity)
        employee = self._employees.get_by_identity_number(identity_number)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def update_employee(
        self,
        *,
        identity: Optional[Identity],
        identity_number: str,
        payload: Optional[Mapping[str, Any]],
    ) -> Employee:
        authorize_directory(identity)
        changes = parse_employee_patch(payload)
        if not self._employees.update(identity_number, changes, now=self._clock()):
            raise NotFoundError("Employee not found")
        return self.get_employee(identity=identity, identity_number=changes.get("identity_number", identity_number))

    def delete_employee(self, *, identity: Optional[Identity], identity_number: str) -> None:
        authorize_directory(identity)
        if not self._employees.delete(identity_number):
            raise NotFoundError("Employee not found")
        logger.info("Employee %s deleted by %s", identity_number, identity.user_id)
