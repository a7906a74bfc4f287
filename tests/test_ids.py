from __future__ import annotations

import pytest

from employee_registry.errors import InvalidIdentifierError
from employee_registry.ids import format_identifier, parse_identifier


@pytest.mark.parametrize(("raw", "expected"), [("1", 1), (" 42 ", 42), ("007", 7), (9, 9)])
def test_parse_identifier(raw, expected: int) -> None:
    assert parse_identifier(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "1.5", "-3", "0", "12a", "²", 0, -1, True, None, 1.0])
def test_parse_identifier_rejects(raw) -> None:
    with pytest.raises(InvalidIdentifierError):
        parse_identifier(raw)


def test_invalid_identifier_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        parse_identifier("nope")


def test_format_identifier() -> None:
    assert format_identifier(15) == "15"
