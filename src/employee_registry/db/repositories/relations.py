"""
employee_registry.db.repositories.relations

Queries shared by more than one repository.

Responsibilities:
- Single-row parent lookups (department / role by id).
- Employee listings filtered by a foreign key, with an explicit check that
  the filter target exists.
- Hydration: attach each employee's department and role, one lookup per row.
- Translate raw constraint violations into caller-facing errors.
"""

from __future__ import annotations

from sqlalchemy import Column, Select, Table, desc, select

from employee_registry.db.database import Database
from employee_registry.db.schema import departments, employees, roles
from employee_registry.errors import (
    ConflictError,
    ConstraintViolation,
    InvariantError,
    NotFoundError,
    RegistryError,
    StoreError,
)
from employee_registry.models import Department, HydratedEmployee, Role
from employee_registry.observability.logging import get_logger

log = get_logger(__name__)


async def get_department(db: Database, department_id: int) -> Department | None:
    row = await db.fetch_one(select(departments).where(departments.c.id == department_id))
    return Department.model_validate(row) if row is not None else None


async def get_role(db: Database, role_id: int) -> Role | None:
    row = await db.fetch_one(select(roles).where(roles.c.id == role_id))
    return Role.model_validate(row) if row is not None else None


async def require_department(db: Database, department_id: int) -> Department:
    department = await get_department(db, department_id)
    if department is None:
        log.warning("department_not_found", department_id=department_id)
        raise NotFoundError("department", department_id)
    return department


async def require_role(db: Database, role_id: int) -> Role:
    role = await get_role(db, role_id)
    if role is None:
        log.warning("role_not_found", role_id=role_id)
        raise NotFoundError("role", role_id)
    return role


def newest_first(stmt: Select, table: Table) -> Select:
    # Timestamps can tie at microsecond resolution; id breaks the tie.
    return stmt.order_by(desc(table.c.created_at), desc(table.c.id))


async def hydrate(
    db: Database,
    rows: list[dict],
    *,
    department: Department | None = None,
    role: Role | None = None,
) -> list[HydratedEmployee]:
    """
    Attach department and role to each employee row, preserving input order.

    A parent passed in explicitly is reused for every row instead of being
    fetched again. A parent missing for a row that passed its foreign-key
    constraint raises `InvariantError`.
    """

    hydrated: list[HydratedEmployee] = []
    for row in rows:
        row_department = department
        if row_department is None:
            row_department = await get_department(db, row["department_id"])
        row_role = role
        if row_role is None:
            row_role = await get_role(db, row["role_id"])
        if row_department is None or row_role is None:
            log.error(
                "hydration_missing_parent",
                employee_id=row["id"],
                department_id=row["department_id"],
                role_id=row["role_id"],
                department_found=row_department is not None,
                role_found=row_role is not None,
            )
            raise InvariantError(
                f"employee {row['id']} references a department or role that does not exist"
            )
        hydrated.append(HydratedEmployee(**row, department=row_department, role=row_role))
    return hydrated


async def employees_in_department(db: Database, department_id: int) -> list[HydratedEmployee]:
    department = await require_department(db, department_id)
    stmt = newest_first(
        select(employees).where(employees.c.department_id == department_id), employees
    )
    return await hydrate(db, await db.fetch_many(stmt), department=department)


async def employees_with_role(db: Database, role_id: int) -> list[HydratedEmployee]:
    role = await require_role(db, role_id)
    stmt = newest_first(select(employees).where(employees.c.role_id == role_id), employees)
    return await hydrate(db, await db.fetch_many(stmt), role=role)


async def has_employees(db: Database, column: Column[int], value: int) -> bool:
    row = await db.fetch_one(select(employees.c.id).where(column == value).limit(1))
    return row is not None


async def vanished_parent(
    db: Database, *, department_id: int | None, role_id: int | None
) -> NotFoundError:
    """
    Name the parent an employee write lost to a concurrent delete.

    Called after the store rejected a foreign key that passed its existence
    check; re-reads each supplied reference to find the one that is gone.
    """

    if department_id is not None and await get_department(db, department_id) is None:
        log.warning("department_vanished", department_id=department_id)
        return NotFoundError("department", department_id)
    if role_id is not None and await get_role(db, role_id) is None:
        log.warning("role_vanished", role_id=role_id)
        return NotFoundError("role", role_id)
    # Both parents readable again: blame the first reference written.
    if department_id is not None:
        return NotFoundError("department", department_id)
    return NotFoundError("role", role_id)


def translate_violation(
    exc: ConstraintViolation,
    *,
    entity: str,
    identifier: int | str | None = None,
) -> RegistryError:
    """
    Map a store constraint failure onto the caller-facing taxonomy.

    A foreign-key failure here means a dependent row appeared under a delete.
    Anything else stays a plain `StoreError`.
    """

    if exc.kind == "unique":
        field = exc.target or "value"
        log.warning("unique_conflict", entity=entity, field=field)
        return ConflictError(f"{entity} with this {field} already exists")
    if exc.kind == "foreign_key":
        log.warning("foreign_key_violation", entity=entity, identifier=identifier)
        return ConflictError(f"cannot delete {entity} {identifier}: it has dependent employees")
    return StoreError(f"{entity} write failed: {exc}")


# --- Module Notes -----------------------------------------------------------
# Department and role repositories call `employees_in_department` / `employees_with_role`
# directly instead of holding an EmployeeRepo, which keeps each repository testable alone.
