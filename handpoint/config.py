"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    handpoint_env: str = "development"
    handpoint_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Incoming images are scaled down to fit this box before analysis
    max_image_width: int = 960
    max_image_height: int = 540

    # Engine defaults for requests that don't override them
    default_zone_count: int = 3
    default_arc: float = 180.0
    blur_ksize: int = 5

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
