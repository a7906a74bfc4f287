from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from employee_registry.models import (
    Department,
    DepartmentCreate,
    DepartmentPatch,
    EmployeeCreate,
    EmployeePatch,
    RolePatch,
)


def test_patch_tracks_supplied_fields_only() -> None:
    patch = EmployeePatch(name="Jane")
    assert patch.changes() == {"name": "Jane"}
    assert not patch.is_empty()
    assert EmployeePatch().is_empty()
    assert EmployeePatch().changes() == {}


def test_explicit_null_description_is_kept() -> None:
    assert DepartmentPatch(description=None).changes() == {"description": None}
    assert RolePatch(description=None).changes() == {"description": None}


@pytest.mark.parametrize(
    ("model", "field"),
    [
        (DepartmentPatch, "name"),
        (RolePatch, "title"),
        (EmployeePatch, "email"),
        (EmployeePatch, "role_id"),
    ],
)
def test_explicit_null_on_required_column_is_rejected(model, field: str) -> None:
    with pytest.raises(ValidationError):
        model(**{field: None})


def test_inputs_accept_camel_case_and_ignore_unknown_fields() -> None:
    data = EmployeeCreate.model_validate(
        {
            "name": "Jane",
            "email": "jane@example.com",
            "departmentId": 3,
            "roleId": 4,
            "salary": 100,
        }
    )
    assert data.department_id == 3
    assert data.role_id == 4
    assert not hasattr(data, "salary")

    patch = EmployeePatch.model_validate({"roleId": 2, "nickname": "JJ"})
    assert patch.changes() == {"role_id": 2}


def test_create_requires_name() -> None:
    with pytest.raises(ValidationError):
        DepartmentCreate(name="")
    with pytest.raises(ValidationError):
        DepartmentCreate.model_validate({"description": "no name"})


def test_record_public_rendering() -> None:
    created = datetime(2026, 1, 2, 3, 4, 5)
    department = Department(id=12, name="Ops", description=None, created_at=created)
    public = department.to_public()
    assert public["id"] == "12"
    assert public["name"] == "Ops"
    assert datetime.fromisoformat(public["createdAt"]) == created
    # Python-side dumps keep integer ids.
    assert department.model_dump()["id"] == 12


def test_records_are_immutable() -> None:
    department = Department(id=1, name="Ops", created_at=datetime(2026, 1, 1))
    with pytest.raises(ValidationError):
        department.name = "Other"
