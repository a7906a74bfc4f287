from __future__ import annotations

from employee_registry.db.repositories.catalog import CatalogRepo
from employee_registry.db.repositories.relations import employees_in_department
from employee_registry.db.schema import departments, employees
from employee_registry.models import Department, DepartmentCreate, DepartmentPatch, HydratedEmployee


class DepartmentRepo(CatalogRepo[Department]):
    table = departments
    record_type = Department
    entity = "department"
    employee_column = employees.c.department_id

    async def list_employees(self, department_id: int) -> list[HydratedEmployee]:
        # Raises NotFoundError when the department itself does not exist.
        return await employees_in_department(self._db, department_id)

    async def create(self, data: DepartmentCreate) -> Department:
        return await super().create(data)

    async def update(self, department_id: int, patch: DepartmentPatch) -> Department:
        return await super().update(department_id, patch)
