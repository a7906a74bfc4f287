"""
employee_registry.models

Records returned by repositories and the input shapes they accept.

Responsibilities:
- Typed, immutable records for departments, roles, employees and hydrated employees.
- One create model and one patch model per entity. A patch only carries the
  fields the caller actually supplied (`model_fields_set`).
- Public rendering (`to_public`) with camelCase keys and string ids.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, model_validator
from pydantic.alias_generators import to_camel

from employee_registry.ids import format_identifier

# Ids stay ints in Python and render as decimal strings in JSON output.
RecordId = Annotated[int, PlainSerializer(format_identifier, return_type=str, when_used="json")]


def utcnow() -> datetime:
    # Persist naive UTC timestamps; SQLite has no tz-aware column type.
    return datetime.now(UTC).replace(tzinfo=None)


class Record(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    public_exclude: ClassVar[frozenset[str]] = frozenset()

    def to_public(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude=set(self.public_exclude))


class Department(Record):
    id: RecordId
    name: str
    description: str | None = None
    created_at: datetime


class Role(Record):
    id: RecordId
    title: str
    description: str | None = None
    created_at: datetime


class Employee(Record):
    id: RecordId
    name: str
    email: str
    department_id: RecordId
    role_id: RecordId
    created_at: datetime
    updated_at: datetime


class HydratedEmployee(Employee):
    """An employee with the department and role it currently references. Never persisted."""

    public_exclude: ClassVar[frozenset[str]] = frozenset({"department_id", "role_id"})

    department: Department
    role: Role


class InputModel(BaseModel):
    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)


class PatchModel(InputModel):
    # Columns that are NOT NULL: they may be omitted from a patch but not set to None.
    non_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_explicit_nulls(self) -> Self:
        for field in sorted(self.model_fields_set & self.non_nullable):
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Only the fields the caller supplied, explicit `None` included."""
        return self.model_dump(exclude_unset=True)

    def is_empty(self) -> bool:
        return not self.model_fields_set


class DepartmentCreate(InputModel):
    name: str = Field(min_length=1)
    description: str | None = None


class DepartmentPatch(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"name"})

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None


class RoleCreate(InputModel):
    title: str = Field(min_length=1)
    description: str | None = None


class RolePatch(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"title"})

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None


class EmployeeCreate(InputModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    department_id: int
    role_id: int


class EmployeePatch(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"name", "email", "department_id", "role_id"}
    )

    name: str | None = Field(default=None, min_length=1)
    email: str | None = Field(default=None, min_length=1)
    department_id: int | None = None
    role_id: int | None = None


# --- Module Notes -----------------------------------------------------------
# Records are validated straight from row mappings (snake_case keys); the camelCase
# aliases only matter for inbound payloads and `to_public()`.
