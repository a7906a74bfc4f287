"""
employee_registry.db.repositories.employees

Repository for employees.

Responsibilities:
- Hydrated reads (each employee with its department and role).
- Foreign-key validation before every write that sets department_id / role_id.
- Partial updates that bump `updated_at` only when something is written.
"""

from __future__ import annotations

from sqlalchemy import delete, insert, select, update

from employee_registry.db.database import Database
from employee_registry.db.repositories.relations import (
    employees_in_department,
    employees_with_role,
    hydrate,
    newest_first,
    require_department,
    require_role,
    translate_violation,
    vanished_parent,
)
from employee_registry.db.schema import employees
from employee_registry.errors import ConstraintViolation, InvariantError, NotFoundError
from employee_registry.models import EmployeeCreate, EmployeePatch, HydratedEmployee, utcnow
from employee_registry.observability.logging import get_logger

log = get_logger(__name__)


class EmployeeRepo:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def list_all(self) -> list[HydratedEmployee]:
        rows = await self._db.fetch_many(newest_first(select(employees), employees))
        return await hydrate(self._db, rows)

    async def find_by_id(self, employee_id: int) -> HydratedEmployee | None:
        row = await self._db.fetch_one(select(employees).where(employees.c.id == employee_id))
        if row is None:
            return None
        (hydrated,) = await hydrate(self._db, [row])
        return hydrated

    async def find_by_department(self, department_id: int) -> list[HydratedEmployee]:
        return await employees_in_department(self._db, department_id)

    async def find_by_role(self, role_id: int) -> list[HydratedEmployee]:
        return await employees_with_role(self._db, role_id)

    async def create(self, data: EmployeeCreate) -> HydratedEmployee:
        # Both references are checked before anything is written.
        await require_department(self._db, data.department_id)
        await require_role(self._db, data.role_id)

        now = utcnow()
        stmt = insert(employees).values(
            name=data.name,
            email=data.email,
            department_id=data.department_id,
            role_id=data.role_id,
            created_at=now,
            updated_at=now,
        )
        try:
            result = await self._db.execute(stmt)
        except ConstraintViolation as exc:
            if exc.kind == "foreign_key":
                raise await vanished_parent(
                    self._db, department_id=data.department_id, role_id=data.role_id
                ) from exc
            raise translate_violation(exc, entity="employee") from exc

        created = await self.find_by_id(result.generated_id)
        if created is None:
            log.error("created_row_missing", entity="employee", record_id=result.generated_id)
            raise InvariantError(f"employee {result.generated_id} vanished right after insert")
        log.info(
            "employee_created",
            employee_id=created.id,
            department_id=created.department_id,
            role_id=created.role_id,
        )
        return created

    async def update(self, employee_id: int, patch: EmployeePatch) -> HydratedEmployee:
        if patch.department_id is not None:
            await require_department(self._db, patch.department_id)
        if patch.role_id is not None:
            await require_role(self._db, patch.role_id)

        if patch.is_empty():
            current = await self.find_by_id(employee_id)
            if current is None:
                raise NotFoundError("employee", employee_id)
            return current

        changes = patch.changes()
        stmt = (
            update(employees)
            .where(employees.c.id == employee_id)
            .values(**changes, updated_at=utcnow())
        )
        try:
            result = await self._db.execute(stmt)
        except ConstraintViolation as exc:
            if exc.kind == "foreign_key":
                raise await vanished_parent(
                    self._db, department_id=patch.department_id, role_id=patch.role_id
                ) from exc
            raise translate_violation(exc, entity="employee", identifier=employee_id) from exc

        updated = await self.find_by_id(employee_id) if result.rows_affected else None
        if updated is None:
            log.warning("update_target_missing", entity="employee", record_id=employee_id)
            raise NotFoundError("employee", employee_id)
        log.info("employee_updated", employee_id=employee_id, fields=sorted(changes))
        return updated

    async def delete(self, employee_id: int) -> bool:
        # Employees are leaves: nothing references them, so no guard.
        result = await self._db.execute(delete(employees).where(employees.c.id == employee_id))
        deleted = result.rows_affected > 0
        log.info("employee_deleted", employee_id=employee_id, deleted=deleted)
        return deleted


# --- Module Notes -----------------------------------------------------------
# Existence checks and writes are separate round-trips with no transaction around
# them; a parent deleted in between surfaces from the store as NotFoundError.
