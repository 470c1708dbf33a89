"""
Application configuration loaded from environment variables.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralised application settings."""

    model_config = SettingsConfigDict(
        env_file=(".env",),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openai_api_key: SecretStr | None = Field(default=None, alias="OPENAI_API_KEY")
    llm_model_name: str = Field(default="gpt-4.1-mini", alias="LLM_MODEL_NAME")
    embedding_model_name: str = Field(default="text-embedding-ada-002", alias="EMBEDDING_MODEL_NAME")
    embedding_timeout_sec: float = Field(default=30.0, gt=0, alias="EMBEDDING_TIMEOUT_SEC")
    embedding_max_retries: int = Field(default=2, ge=0, alias="EMBEDDING_MAX_RETRIES")

    corpus_path: str = Field(default="./data/cs61a_syllabus_embeddings.json", alias="CORPUS_PATH")
    corpus_cache_enabled: bool = Field(default=False, alias="CORPUS_CACHE_ENABLED")

    default_top_k: int = Field(default=4, gt=0, alias="DEFAULT_TOP_K")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8000, alias="APP_PORT")


settings = Settings()


def setup_logging() -> logging.Logger:
    """
    Configure base logging for the app.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    )
    return logging.getLogger("app")


def public_settings() -> Dict[str, Any]:
    """
    Return settings without secrets for safe logging/inspection.
    """
    return settings.model_dump(
        exclude={"openai_api_key"},
        exclude_none=True,
    )


__all__ = ["Settings", "settings", "setup_logging", "public_settings"]
