"""
employee_registry.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the storage and logging layers.
- Resolve the storage location (explicit URL, or a SQLite file path with a default).
- Offer a cached settings instance for the shared database provider.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_PATH = "./employee_management.db"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EMPLOYEE_REGISTRY_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "employee-registry"
    log_level: str = "INFO"

    # Persistence. An explicit URL wins over the SQLite file path.
    database_url: str | None = Field(default=None, repr=False)
    database_path: str = Field(
        default=DEFAULT_DATABASE_PATH,
        validation_alias=AliasChoices(
            "EMPLOYEE_REGISTRY_DATABASE_PATH", "DATABASE_PATH", "database_path"
        ),
    )
    echo_sql: bool = False

    @property
    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite+aiosqlite:///{self.database_path}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars on every shared-handle lookup.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# `DATABASE_PATH` is accepted unprefixed so deployments that already export it
# keep pointing at the same file.
