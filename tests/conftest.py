from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

import pytest

from staffdesk.auth.policy import Identity
from staffdesk.auth.tokens import TokenService
from staffdesk.common.pagination import PageRequest
from staffdesk.container import wire_container
from staffdesk.core.enums import DepartmentSort, EmployeeSort, SortOrder
from staffdesk.core.exceptions import ConflictError, NotFoundError, StorageError
from staffdesk.departments.model import Department, DepartmentFilter
from staffdesk.employees.model import Employee, EmployeeFilter, NewEmployee
from staffdesk.files.model import StoredFile
from staffdesk.main import create_app
from staffdesk.users.model import User


class TickingClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime = datetime(2026, 1, 1, 9, 0, 0)):
        self._now = start
        self._lock = threading.Lock()

    def __call__(self) -> datetime:
        with self._lock:
            self._now += timedelta(seconds=1)
            return self._now


class InMemoryUsers:
    def __init__(self):
        self._by_id: dict[str, User] = {}
        self._lock = threading.Lock()

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email.lower()), None)

    def create_user(self, *, user_id, email, password_hash, now) -> User:
        with self._lock:
            if self.get_by_email(email):
                raise ConflictError("Email already exists")
            user = User(
                user_id=user_id,
                email=email.lower(),
                password_hash=password_hash,
                name=None,
                user_image_uri=None,
                company_name=None,
                company_image_uri=None,
                created_at=now,
                updated_at=now,
            )
            self._by_id[user_id] = user
            return user

    def update_profile(self, user_id, changes, *, now) -> bool:
        with self._lock:
            user = self._by_id.get(user_id)
            if not user:
                return False
            self._by_id[user_id] = replace(user, **changes, updated_at=now)
            return True


class InMemoryDirectory:
    """Shared store behind the department and employee fakes.

    The lock plays the role of the database's unique indexes and foreign
    key, so concurrent writers see the same outcomes as against MySQL.
    """

    def __init__(self):
        self.departments: dict[str, Department] = {}
        self.employees: dict[str, Employee] = {}
        self.lock = threading.Lock()


def _page(items, page: PageRequest):
    return items[page.offset : page.offset + page.limit]


class InMemoryDepartments:
    def __init__(self, directory: InMemoryDirectory):
        self._d = directory

    def _name_taken(self, name: str, *, exclude: Optional[str] = None) -> bool:
        return any(
            d.name.lower() == name.lower() and d.department_id != exclude for d in self._d.departments.values()
        )

    def create(self, *, department_id, name, now) -> Department:
        with self._d.lock:
            if self._name_taken(name):
                raise ConflictError("Department name already exists")
            department = Department(department_id=department_id, name=name, created_at=now, updated_at=now)
            self._d.departments[department_id] = department
            return department

    def get_by_id(self, department_id) -> Optional[Department]:
        return self._d.departments.get(department_id)

    def list(self, query: DepartmentFilter):
        items = list(self._d.departments.values())
        if query.name:
            items = [d for d in items if query.name.lower() in d.name.lower()]
        if query.sort_by == DepartmentSort.NAME:
            items.sort(key=lambda d: (d.name.lower(), d.department_id), reverse=query.order == SortOrder.DESC)
        else:
            items.sort(key=lambda d: (d.created_at, d.department_id), reverse=query.order == SortOrder.DESC)
        return _page(items, query.page)

    def update(self, department_id, *, name, now) -> bool:
        with self._d.lock:
            department = self._d.departments.get(department_id)
            if not department:
                return False
            if self._name_taken(name, exclude=department_id):
                raise ConflictError("Department name already exists")
            self._d.departments[department_id] = replace(department, name=name, updated_at=now)
            return True

    def delete(self, department_id) -> bool:
        with self._d.lock:
            if department_id not in self._d.departments:
                return False
            if any(e.department_id == department_id for e in self._d.employees.values()):
                raise ConflictError("Department still contains employees")
            del self._d.departments[department_id]
            return True


class InMemoryEmployees:
    def __init__(self, directory: InMemoryDirectory):
        self._d = directory

    def _joined(self, employee: Employee) -> Employee:
        department = self._d.departments.get(employee.department_id)
        return replace(employee, department_name=department.name if department else None)

    def create(self, *, employee_id, employee: NewEmployee, now) -> Employee:
        with self._d.lock:
            if any(e.identity_number == employee.identity_number for e in self._d.employees.values()):
                raise ConflictError("Identity number already exists")
            if employee.department_id not in self._d.departments:
                raise NotFoundError("Department not found")
            stored = Employee(
                employee_id=employee_id,
                identity_number=employee.identity_number,
                name=employee.name,
                gender=employee.gender,
                department_id=employee.department_id,
                employee_image_uri=employee.employee_image_uri,
                created_at=now,
                updated_at=now,
            )
            self._d.employees[employee_id] = stored
            return self._joined(stored)

    def get_by_identity_number(self, identity_number) -> Optional[Employee]:
        for e in self._d.employees.values():
            if e.identity_number == identity_number:
                return self._joined(e)
        return None

    def list(self, query: EmployeeFilter):
        items = [self._joined(e) for e in self._d.employees.values()]
        if query.identity_number:
            items = [e for e in items if e.identity_number.startswith(query.identity_number)]
        if query.name:
            items = [e for e in items if query.name.lower() in e.name.lower()]
        if query.department_id:
            items = [e for e in items if e.department_id == query.department_id]
        if query.gender:
            items = [e for e in items if e.gender == query.gender]

        sort_keys = {
            EmployeeSort.CREATED_AT: lambda e: (e.created_at, e.employee_id),
            EmployeeSort.NAME: lambda e: (e.name.lower(), e.employee_id),
            EmployeeSort.IDENTITY_NUMBER: lambda e: (e.identity_number, e.employee_id),
        }
        items.sort(key=sort_keys[query.sort_by], reverse=query.order == SortOrder.DESC)
        return _page(items, query.page)

    def update(self, identity_number, changes, *, now) -> bool:
        with self._d.lock:
            current = next((e for e in self._d.employees.values() if e.identity_number == identity_number), None)
            if not current:
                return False
            new_number = changes.get("identity_number", identity_number)
            if any(
                e.identity_number == new_number and e.employee_id != current.employee_id
                for e in self._d.employees.values()
            ):
                raise ConflictError("Identity number already exists")
            if changes.get("department_id", current.department_id) not in self._d.departments:
                raise NotFoundError("Department not found")
            self._d.employees[current.employee_id] = replace(current, **changes, updated_at=now)
            return True

    def delete(self, identity_number) -> bool:
        with self._d.lock:
            for employee_id, e in list(self._d.employees.items()):
                if e.identity_number == identity_number:
                    del self._d.employees[employee_id]
                    return True
            return False


class InMemoryFiles:
    def __init__(self):
        self.rows: list[StoredFile] = []
        self.fail = False

    def create(self, stored: StoredFile) -> StoredFile:
        if self.fail:
            raise StorageError("Database error")
        self.rows.append(stored)
        return stored

    def list_for_user(self, user_id, page: PageRequest):
        items = sorted((f for f in self.rows if f.user_id == user_id), key=lambda f: (f.created_at, f.file_id), reverse=True)
        return _page(items, page)


class FakeStorage:
    def __init__(self):
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.fail = False

    def put(self, key: str, data: bytes, content_type: str) -> str:
        if self.fail:
            raise StorageError("Failed to upload file")
        self.objects[key] = (data, content_type)
        return f"https://staffdesk-test.s3.amazonaws.com/{key}"

    def delete(self, key: str) -> None:
        self.objects.pop(key, None)


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def directory():
    return InMemoryDirectory()


@pytest.fixture
def users_repo():
    return InMemoryUsers()


@pytest.fixture
def departments_repo(directory):
    return InMemoryDepartments(directory)


@pytest.fixture
def employees_repo(directory):
    return InMemoryEmployees(directory)


@pytest.fixture
def files_repo():
    return InMemoryFiles()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def token_service():
    return TokenService("test-secret")


@pytest.fixture
def manager():
    return Identity(user_id="11111111-1111-4111-8111-111111111111")


@pytest.fixture
def container(users_repo, departments_repo, employees_repo, files_repo, storage, token_service, clock):
    return wire_container(
        users_repo=users_repo,
        departments_repo=departments_repo,
        employees_repo=employees_repo,
        files_repo=files_repo,
        storage=storage,
        token_service=token_service,
        default_page_size=5,
        max_page_size=10,
        clock=clock,
    )


@pytest.fixture
def app(container):
    return create_app(container, settings_module="staffdesk.settings.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register_manager(client):
    def _register(email: str = "boss@example.com", password: str = "password123") -> dict:
        resp = client.post("/v1/auth", json={"email": email, "password": password, "action": "create"})
        assert resp.status_code == 201, resp.get_json()
        return {"Authorization": f"Bearer {resp.get_json()['token']}"}

    return _register


@pytest.fixture
def auth_headers(register_manager):
    return register_manager()
