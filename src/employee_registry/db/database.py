"""
employee_registry.db.database

Storage binding over the async SQLAlchemy engine.

Responsibilities:
- Parameterized execute / fetch-one / fetch-many / close over a single engine.
- Idempotent, initialize-once schema setup.
- Translate driver errors into `StoreError` / `ConstraintViolation`.
- Own the process-wide shared handle (`get_database` / `close_database`).
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql.base import Executable

from employee_registry.db.engine import create_engine
from employee_registry.db.init_db import init_db
from employee_registry.errors import ConstraintKind, ConstraintViolation, StoreError
from employee_registry.observability.logging import get_logger
from employee_registry.settings import Settings, get_settings

log = get_logger(__name__)

Statement = Executable | str
Params = Mapping[str, Any] | None

# SQLite wording first, PostgreSQL wording second.
_CONSTRAINT_PATTERNS: tuple[tuple[ConstraintKind, re.Pattern[str]], ...] = (
    ("unique", re.compile(r"UNIQUE constraint failed: (?P<target>[\w.]+)")),
    ("unique", re.compile(r'violates unique constraint "(?P<target>\w+)"')),
    ("foreign_key", re.compile(r"FOREIGN KEY constraint failed")),
    ("foreign_key", re.compile(r'violates foreign key constraint "(?P<target>\w+)"')),
    ("not_null", re.compile(r"NOT NULL constraint failed: (?P<target>[\w.]+)")),
    ("not_null", re.compile(r'null value in column "(?P<target>\w+)"')),
    ("check", re.compile(r"CHECK constraint failed")),
    ("check", re.compile(r'violates check constraint "(?P<target>\w+)"')),
)


@dataclass(frozen=True, slots=True)
class ExecuteResult:
    generated_id: int | None
    rows_affected: int


def classify_integrity_error(exc: IntegrityError) -> ConstraintViolation:
    message = str(exc.orig) if exc.orig is not None else str(exc)
    for kind, pattern in _CONSTRAINT_PATTERNS:
        match = pattern.search(message)
        if match is None:
            continue
        target = match.groupdict().get("target")
        if target and "." in target:
            # "employees.email" -> "email"
            target = target.rsplit(".", 1)[1]
        return ConstraintViolation(message, kind=kind, target=target)
    return ConstraintViolation(message, kind="other")


def _as_executable(statement: Statement) -> Executable:
    return text(statement) if isinstance(statement, str) else statement


class Database:
    """
    Minimal async handle the repositories share.

    Every `execute` runs in its own short transaction, so each statement is
    independently atomic and nothing spans statements.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._init_lock = asyncio.Lock()
        self._initialized = False

    @classmethod
    def from_settings(cls, settings: Settings) -> Database:
        return cls(create_engine(settings))

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        if self._initialized:
            return
        async with self._init_lock:
            # A concurrent caller may have finished while we waited.
            if self._initialized:
                return
            try:
                await init_db(self._engine)
            except SQLAlchemyError as exc:
                log.error("schema_init_failed", error=str(exc))
                raise StoreError(f"schema initialization failed: {exc}") from exc
            self._initialized = True
            log.info("schema_initialized", url=self._engine.url.render_as_string())

    async def execute(self, statement: Statement, params: Params = None) -> ExecuteResult:
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(_as_executable(statement), params)
                generated_id = result.lastrowid
                rows_affected = result.rowcount
        except IntegrityError as exc:
            violation = classify_integrity_error(exc)
            log.debug("constraint_violation", kind=violation.kind, target=violation.target)
            raise violation from exc
        except SQLAlchemyError as exc:
            log.error("execute_failed", error=str(exc))
            raise StoreError(str(exc)) from exc
        return ExecuteResult(generated_id=generated_id, rows_affected=rows_affected)

    async def fetch_one(self, statement: Statement, params: Params = None) -> dict[str, Any] | None:
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(_as_executable(statement), params)
                row = result.mappings().first()
        except SQLAlchemyError as exc:
            log.error("fetch_one_failed", error=str(exc))
            raise StoreError(str(exc)) from exc
        return dict(row) if row is not None else None

    async def fetch_many(self, statement: Statement, params: Params = None) -> list[dict[str, Any]]:
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(_as_executable(statement), params)
                rows = result.mappings().all()
        except SQLAlchemyError as exc:
            log.error("fetch_many_failed", error=str(exc))
            raise StoreError(str(exc)) from exc
        return [dict(row) for row in rows]

    async def ping(self) -> bool:
        # Readiness: verify the store is reachable.
        await self.fetch_one("SELECT 1 AS ok")
        return True

    async def close(self) -> None:
        # Dispose the engine to close pools/FDs gracefully.
        await self._engine.dispose()
        self._initialized = False
        log.info("database_closed")


_shared: Database | None = None
_shared_lock: asyncio.Lock | None = None
_shared_lock_loop: asyncio.AbstractEventLoop | None = None


def _lock() -> asyncio.Lock:
    # asyncio.Lock binds to the loop that first contends it; each new loop gets its own.
    global _shared_lock, _shared_lock_loop
    loop = asyncio.get_running_loop()
    if _shared_lock is None or _shared_lock_loop is not loop:
        _shared_lock = asyncio.Lock()
        _shared_lock_loop = loop
    return _shared_lock


async def get_database(settings: Settings | None = None) -> Database:
    """
    Return the process-wide handle, creating and initializing it on first access.

    Concurrent first callers converge on one handle. `settings` only matters for
    the call that creates it.
    """

    global _shared
    if _shared is not None:
        return _shared
    async with _lock():
        if _shared is None:
            db = Database.from_settings(settings or get_settings())
            try:
                await db.initialize()
            except BaseException:
                await db.close()
                raise
            _shared = db
    return _shared


async def close_database() -> None:
    """Release the shared handle; the next `get_database()` starts from scratch."""

    global _shared
    async with _lock():
        db, _shared = _shared, None
    if db is not None:
        await db.close()


# --- Module Notes -----------------------------------------------------------
# Repositories receive a `Database` at construction and never call `get_database()`
# themselves, so tests can hand them an isolated handle.
