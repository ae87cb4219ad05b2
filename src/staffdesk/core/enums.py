from __future__ import annotations

from enum import Enum


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class AuthAction(str, Enum):
    """Variant of POST /v1/auth."""

    CREATE = "create"
    LOGIN = "login"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class DepartmentSort(str, Enum):
    CREATED_AT = "createdAt"
    NAME = "name"


class EmployeeSort(str, Enum):
    CREATED_AT = "createdAt"
    NAME = "name"
    IDENTITY_NUMBER = "identityNumber"
