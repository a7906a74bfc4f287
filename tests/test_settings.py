from __future__ import annotations

import pytest

from employee_registry.settings import DEFAULT_DATABASE_PATH, Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "EMPLOYEE_REGISTRY_DATABASE_URL",
        "EMPLOYEE_REGISTRY_DATABASE_PATH",
        "DATABASE_PATH",
    ):
        monkeypatch.delenv(name, raising=False)


def test_default_database_location() -> None:
    settings = Settings()
    assert settings.database_path == DEFAULT_DATABASE_PATH
    assert settings.resolved_database_url == f"sqlite+aiosqlite:///{DEFAULT_DATABASE_PATH}"


def test_database_path_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EMPLOYEE_REGISTRY_DATABASE_PATH", "/tmp/registry.db")
    assert Settings().resolved_database_url == "sqlite+aiosqlite:////tmp/registry.db"


def test_legacy_database_path_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_PATH", "/var/lib/emp.db")
    assert Settings().database_path == "/var/lib/emp.db"


def test_explicit_url_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EMPLOYEE_REGISTRY_DATABASE_PATH", "/tmp/ignored.db")
    monkeypatch.setenv("EMPLOYEE_REGISTRY_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    assert Settings().resolved_database_url == "sqlite+aiosqlite:///:memory:"


def test_database_url_hidden_from_repr() -> None:
    settings = Settings(database_url="postgresql+asyncpg://user:secret@db/registry")
    assert "secret" not in repr(settings)
