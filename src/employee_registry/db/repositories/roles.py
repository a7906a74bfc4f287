from __future__ import annotations

from employee_registry.db.repositories.catalog import CatalogRepo
from employee_registry.db.repositories.relations import employees_with_role
from employee_registry.db.schema import employees, roles
from employee_registry.models import HydratedEmployee, Role, RoleCreate, RolePatch


class RoleRepo(CatalogRepo[Role]):
    table = roles
    record_type = Role
    entity = "role"
    employee_column = employees.c.role_id

    async def list_employees(self, role_id: int) -> list[HydratedEmployee]:
        # Raises NotFoundError when the role itself does not exist.
        return await employees_with_role(self._db, role_id)

    async def create(self, data: RoleCreate) -> Role:
        return await super().create(data)

    async def update(self, role_id: int, patch: RolePatch) -> Role:
        return await super().update(role_id, patch)
