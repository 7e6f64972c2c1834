"""Service configuration loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from the environment or a .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # HTTP
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"

    # Storage
    store_backend: Literal["memory", "database"] = "memory"
    database_url: str = ""
    seed_sample_data: bool = True

    # Behaviour
    delete_policy: Literal["idempotent", "strict"] = "idempotent"
    random_note_importance: bool = True


settings = Settings()
