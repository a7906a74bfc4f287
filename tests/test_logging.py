from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from employee_registry.observability.logging import configure_logging, get_logger
from employee_registry.settings import Settings


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    previous = root.level
    try:
        yield
    finally:
        root.setLevel(previous)
        structlog.reset_defaults()


def test_json_events_carry_service_env_and_bound_context(
    caplog: pytest.LogCaptureFixture,
) -> None:
    configure_logging(Settings(env="test", service_name="registry-json", log_level="INFO"))
    caplog.set_level(logging.INFO)

    get_logger("tests.logging.json", entity="department").info("record_created", record_id=3)

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["event"] == "record_created"
    assert payload["entity"] == "department"
    assert payload["record_id"] == 3
    assert payload["service"] == "registry-json"
    assert payload["env"] == "test"
    assert payload["level"] == "info"
    assert payload["logger"] == "tests.logging.json"
    assert "timestamp" in payload


def test_events_below_configured_level_are_dropped(caplog: pytest.LogCaptureFixture) -> None:
    configure_logging(Settings(env="test", log_level="WARNING"))
    log = get_logger("tests.logging.level")

    log.info("employee_updated", employee_id=1)
    log.warning("role_not_found", role_id=9)

    events = [json.loads(r.getMessage())["event"] for r in caplog.records]
    assert events == ["role_not_found"]


def test_contextvars_are_merged_into_events(caplog: pytest.LogCaptureFixture) -> None:
    configure_logging(Settings(env="dev", log_level="INFO"))
    caplog.set_level(logging.INFO)

    with structlog.contextvars.bound_contextvars(request_id="req-42"):
        get_logger("tests.logging.context").info("database_closed")
    get_logger("tests.logging.context").info("schema_initialized")

    inside, outside = (json.loads(r.getMessage()) for r in caplog.records[-2:])
    assert inside["request_id"] == "req-42"
    assert inside["env"] == "dev"
    assert "request_id" not in outside


def test_driver_loggers_are_quietened() -> None:
    configure_logging(Settings(env="test", log_level="DEBUG"))
    assert logging.getLogger("aiosqlite").level == logging.WARNING
    assert logging.getLogger("sqlalchemy.pool").level == logging.WARNING
