from __future__ import annotations

import pytest

from staffdesk.auth.policy import Identity
from staffdesk.core.enums import Gender
from staffdesk.core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from staffdesk.departments.service import DepartmentService
from staffdesk.employees.model import NewEmployee


@pytest.fixture
def svc(departments_repo, clock):
    return DepartmentService(departments_repo, default_page_size=5, max_page_size=10, clock=clock)


def test_create_department_trims_and_stores(svc, manager, departments_repo):
    dept = svc.create_department(identity=manager, payload={"name": "  Finance  "})

    assert dept.name == "Finance"
    assert departments_repo.get_by_id(dept.department_id) == dept


def test_create_department_requires_authenticated_caller(svc):
    with pytest.raises(AuthenticationError):
        svc.create_department(identity=None, payload={"name": "Finance"})


@pytest.mark.parametrize("name", ["", "abc", "x" * 34, None, 42])
def test_create_department_rejects_bad_names(svc, manager, name):
    with pytest.raises(ValidationError) as exc:
        svc.create_department(identity=manager, payload={"name": name})
    assert exc.value.errors[0].field == "name"


def test_duplicate_department_name_conflicts(svc, manager):
    svc.create_department(identity=manager, payload={"name": "Finance"})
    with pytest.raises(ConflictError):
        svc.create_department(identity=manager, payload={"name": "finance"})


def test_any_manager_sees_departments_created_by_another(svc, manager):
    other = Identity(user_id="22222222-2222-4222-8222-222222222222")
    dept = svc.create_department(identity=manager, payload={"name": "Finance"})

    assert svc.get_department(identity=other, department_id=dept.department_id) == dept
    updated = svc.update_department(identity=other, department_id=dept.department_id, payload={"name": "Treasury"})
    assert updated.name == "Treasury"


def test_list_defaults_to_newest_first(svc, manager):
    for name in ("Alpha", "Bravo", "Charlie"):
        svc.create_department(identity=manager, payload={"name": name})

    page = svc.list_departments(identity=manager, params={})
    assert [d.name for d in page.items] == ["Charlie", "Bravo", "Alpha"]


def test_list_filters_and_sorts_by_name(svc, manager):
    for name in ("Sales West", "Engineering", "Sales East"):
        svc.create_department(identity=manager, payload={"name": name})

    page = svc.list_departments(identity=manager, params={"name": "sales", "sortBy": "name"})
    assert [d.name for d in page.items] == ["Sales East", "Sales West"]


def test_list_clamps_oversized_page(svc, manager):
    for i in range(12):
        svc.create_department(identity=manager, payload={"name": f"Dept {i:02d}"})

    page = svc.list_departments(identity=manager, params={"limit": "1000"})
    assert page.limit == 10
    assert len(page.items) == 10


def test_list_out_of_range_page_is_empty(svc, manager):
    svc.create_department(identity=manager, payload={"name": "Finance"})

    page = svc.list_departments(identity=manager, params={"limit": "5", "offset": "50"})
    assert list(page.items) == []


def test_list_collects_every_bad_param(svc, manager):
    with pytest.raises(ValidationError) as exc:
        svc.list_departments(identity=manager, params={"limit": "ten", "sortBy": "salary", "order": "sideways"})
    assert {e.field for e in exc.value.errors} == {"limit", "sortBy", "order"}


def test_update_refreshes_updated_at(svc, manager):
    dept = svc.create_department(identity=manager, payload={"name": "Finance"})
    updated = svc.update_department(identity=manager, department_id=dept.department_id, payload={"name": "Treasury"})

    assert updated.updated_at > dept.updated_at
    assert updated.created_at == dept.created_at


@pytest.mark.parametrize("department_id", ["not-a-uuid", "0b4f2f0e-8a4c-4c1e-9a7e-7d3b2c1a0f99"])
def test_update_and_delete_unknown_department(svc, manager, department_id):
    with pytest.raises(NotFoundError):
        svc.update_department(identity=manager, department_id=department_id, payload={"name": "Treasury"})
    with pytest.raises(NotFoundError):
        svc.delete_department(identity=manager, department_id=department_id)


def test_delete_department_with_employees_conflicts(svc, manager, employees_repo, clock):
    dept = svc.create_department(identity=manager, payload={"name": "Finance"})
    employees_repo.create(
        employee_id="e1",
        employee=NewEmployee(identity_number="12345", name="Jane Doe", gender=Gender.FEMALE, department_id=dept.department_id),
        now=clock(),
    )

    with pytest.raises(ConflictError):
        svc.delete_department(identity=manager, department_id=dept.department_id)
    assert employees_repo.get_by_identity_number("12345").department_id == dept.department_id


def test_delete_empty_department(svc, manager, departments_repo):
    dept = svc.create_department(identity=manager, payload={"name": "Finance"})
    svc.delete_department(identity=manager, department_id=dept.department_id)

    assert departments_repo.get_by_id(dept.department_id) is None
