"""
employee_registry.errors

Error taxonomy for the data-access layer.

Responsibilities:
- Give callers one distinguishable exception type per failure kind.
- Carry enough context (entity, identifier, constraint) to build a user-facing message.
"""

from __future__ import annotations

from typing import Literal

ConstraintKind = Literal["unique", "foreign_key", "not_null", "check", "other"]


class RegistryError(Exception):
    """Base class for every error raised by this package."""


class NotFoundError(RegistryError):
    def __init__(self, entity: str, identifier: int | str) -> None:
        super().__init__(f"{entity} {identifier} not found")
        self.entity = entity
        self.identifier = identifier


class ConflictError(RegistryError):
    """Uniqueness violation, or a delete blocked by dependent rows."""


class StoreError(RegistryError):
    """Storage engine failure (I/O, malformed statement, driver error)."""


class ConstraintViolation(StoreError):
    """
    Raw integrity failure reported by the store.

    Repositories translate it into `ConflictError` or `NotFoundError`; it only
    reaches callers when it has no better classification.
    """

    def __init__(self, message: str, *, kind: ConstraintKind, target: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.target = target


class InvariantError(RegistryError):
    """Internal consistency violation. Always a bug or store corruption, never user input."""


class InvalidIdentifierError(RegistryError, ValueError):
    def __init__(self, value: object) -> None:
        super().__init__(f"invalid identifier: {value!r}")
        self.value = value
