"""
employee_registry.db.schema

Persistence schema.

Responsibilities:
- Declare the departments, roles and employees tables on a shared `MetaData`.
- Declare the supporting indexes on the employee foreign-key and email columns.
"""

from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, MetaData, String, Table, Text

metadata = MetaData()

departments = Table(
    "departments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False, unique=True),
    Column("description", Text, nullable=True),
    Column("created_at", DateTime, nullable=False),
)

roles = Table(
    "roles",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255), nullable=False, unique=True),
    Column("description", Text, nullable=True),
    Column("created_at", DateTime, nullable=False),
)

employees = Table(
    "employees",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("email", String(320), nullable=False, unique=True),
    Column(
        "department_id",
        Integer,
        ForeignKey("departments.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="RESTRICT"), nullable=False),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
    Index("idx_employees_department", "department_id"),
    Index("idx_employees_role", "role_id"),
    Index("idx_employees_email", "email"),
)


# --- Module Notes -----------------------------------------------------------
# RESTRICT backs up the repository-level delete guard; the guard exists so callers
# get a descriptive ConflictError instead of a raw constraint failure.
