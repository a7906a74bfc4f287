"""
tests.conftest

Shared fixtures: an isolated SQLite file per test, an initialized `Database`
and one repository of each kind bound to it.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from employee_registry.db.database import Database
from employee_registry.db.repositories import DepartmentRepo, EmployeeRepo, RoleRepo
from employee_registry.models import DepartmentCreate, EmployeeCreate, RoleCreate
from employee_registry.settings import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(env="test", database_path=str(tmp_path / "registry.db"))


@pytest_asyncio.fixture
async def db(settings: Settings) -> AsyncIterator[Database]:
    database = Database.from_settings(settings)
    await database.initialize()
    try:
        yield database
    finally:
        await database.close()


@pytest.fixture
def departments(db: Database) -> DepartmentRepo:
    return DepartmentRepo(db)


@pytest.fixture
def roles(db: Database) -> RoleRepo:
    return RoleRepo(db)


@pytest.fixture
def employees(db: Database) -> EmployeeRepo:
    return EmployeeRepo(db)


@pytest_asyncio.fixture
async def staffed(departments: DepartmentRepo, roles: RoleRepo, employees: EmployeeRepo):
    """Engineering / Senior Developer / John Doe, all with id 1."""

    department = await departments.create(DepartmentCreate(name="Engineering"))
    role = await roles.create(RoleCreate(title="Senior Developer"))
    employee = await employees.create(
        EmployeeCreate(
            name="John Doe",
            email="john.doe@example.com",
            department_id=department.id,
            role_id=role.id,
        )
    )
    return department, role, employee
