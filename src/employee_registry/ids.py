"""
employee_registry.ids

Identifier helpers for the boundary between callers and repositories.

Ids are integers inside this package and decimal strings outside it. Callers
parse before calling a repository; repositories never see strings.
"""

from __future__ import annotations

from employee_registry.errors import InvalidIdentifierError


def parse_identifier(value: str | int) -> int:
    if isinstance(value, bool):
        raise InvalidIdentifierError(value)
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        # str.isdigit() also accepts non-ASCII digits such as "²".
        if not text or not (text.isascii() and text.isdigit()):
            raise InvalidIdentifierError(value)
        parsed = int(text)
    else:
        raise InvalidIdentifierError(value)

    if parsed <= 0:
        raise InvalidIdentifierError(value)
    return parsed


def format_identifier(value: int) -> str:
    return str(value)
