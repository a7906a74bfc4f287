"""
employee_registry.db.repositories.catalog

Base repository for the single-table lookup entities (departments, roles).

Responsibilities:
- List / find / create / partial update over one table.
- Block deletes while employees still reference the row.

Subclasses set the table, record type, entity label and the employee
foreign-key column that points at them.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from sqlalchemy import Column, Table, delete, insert, select, update

from employee_registry.db.database import Database
from employee_registry.db.repositories.relations import (
    has_employees,
    newest_first,
    translate_violation,
)
from employee_registry.errors import (
    ConflictError,
    ConstraintViolation,
    InvariantError,
    NotFoundError,
)
from employee_registry.models import InputModel, PatchModel, Record, utcnow
from employee_registry.observability.logging import get_logger

RecordT = TypeVar("RecordT", bound=Record)


class CatalogRepo(Generic[RecordT]):
    table: Table
    record_type: type[RecordT]
    entity: str
    employee_column: Column[int]

    def __init__(self, db: Database) -> None:
        self._db = db
        self._log = get_logger(__name__, entity=self.entity)

    async def list_all(self) -> list[RecordT]:
        rows = await self._db.fetch_many(newest_first(select(self.table), self.table))
        return [self.record_type.model_validate(row) for row in rows]

    async def find_by_id(self, record_id: int) -> RecordT | None:
        row = await self._db.fetch_one(select(self.table).where(self.table.c.id == record_id))
        return self.record_type.model_validate(row) if row is not None else None

    async def create(self, data: InputModel) -> RecordT:
        stmt = insert(self.table).values(**data.model_dump(), created_at=utcnow())
        try:
            result = await self._db.execute(stmt)
        except ConstraintViolation as exc:
            raise translate_violation(exc, entity=self.entity) from exc

        created = await self.find_by_id(result.generated_id)
        if created is None:
            self._log.error("created_row_missing", record_id=result.generated_id)
            raise InvariantError(f"{self.entity} {result.generated_id} vanished right after insert")
        self._log.info("record_created", record_id=created.id)
        return created

    async def update(self, record_id: int, patch: PatchModel) -> RecordT:
        if patch.is_empty():
            # Nothing to write; report the current state.
            current = await self.find_by_id(record_id)
            if current is None:
                raise NotFoundError(self.entity, record_id)
            return current

        changes = patch.changes()
        stmt = update(self.table).where(self.table.c.id == record_id).values(**changes)
        try:
            await self._db.execute(stmt)
        except ConstraintViolation as exc:
            raise translate_violation(exc, entity=self.entity, identifier=record_id) from exc

        updated = await self.find_by_id(record_id)
        if updated is None:
            self._log.warning("update_target_missing", record_id=record_id)
            raise NotFoundError(self.entity, record_id)
        self._log.info("record_updated", record_id=record_id, fields=sorted(changes))
        return updated

    async def delete(self, record_id: int) -> bool:
        if await has_employees(self._db, self.employee_column, record_id):
            self._log.warning("delete_blocked", record_id=record_id)
            raise ConflictError(
                f"cannot delete {self.entity} {record_id}: it has dependent employees"
            )

        stmt = delete(self.table).where(self.table.c.id == record_id)
        try:
            result = await self._db.execute(stmt)
        except ConstraintViolation as exc:
            # An employee was attached between the guard and the delete.
            raise translate_violation(exc, entity=self.entity, identifier=record_id) from exc

        deleted = result.rows_affected > 0
        self._log.info("record_deleted", record_id=record_id, deleted=deleted)
        return deleted


# --- Module Notes -----------------------------------------------------------
# The store also enforces RESTRICT on delete; the explicit guard above exists so
# the caller gets a descriptive ConflictError first.
