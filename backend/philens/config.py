"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    philens_env: str = "development"
    philens_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Engine overrides
    processing_interval: float = 0.1
    stability_update_interval: float = 0.3
    eviction_window: float = 2.0
    suppression_overlap: float = 0.3
    history_size: int = 5
    analyzer_workers: int = 1

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
