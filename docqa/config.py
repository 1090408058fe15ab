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
        populate_by_name=True,
    )

    openai_api_key: SecretStr | None = Field(default=None, alias="OPENAI_API_KEY")
    embedding_model_name: str = Field(default="text-embedding-3-small", alias="EMBEDDING_MODEL_NAME")
    embedding_batch_size: int = Field(default=64, gt=0, alias="EMBEDDING_BATCH_SIZE")
    llm_model_name: str = Field(default="gpt-3.5-turbo", alias="LLM_MODEL_NAME")
    llm_temperature: float = Field(default=0.1, alias="LLM_TEMPERATURE")
    llm_max_tokens: int = Field(default=500, gt=0, alias="LLM_MAX_TOKENS")
    provider_timeout_sec: float = Field(default=30.0, gt=0, alias="PROVIDER_TIMEOUT_SEC")

    vector_store_backend: str = Field(default="memory", alias="VECTOR_STORE_BACKEND")
    collection_name: str = Field(default="rag-documents", alias="COLLECTION_NAME")
    default_top_k: int = Field(default=5, gt=0, alias="DEFAULT_TOP_K")

    chunk_size_chars: int = Field(default=1000, gt=0, alias="CHUNK_SIZE_CHARS")
    chunk_overlap_chars: int = Field(default=200, ge=0, alias="CHUNK_OVERLAP_CHARS")

    upload_dir: str = Field(default="./uploads", alias="UPLOAD_DIR")
    max_file_size: int = Field(default=10 * 1024 * 1024, gt=0, alias="MAX_FILE_SIZE")

    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=3000, alias="APP_PORT")


def load_settings(**overrides: Any) -> Settings:
    """
    Read settings from the environment once, at startup.
    Keyword overrides take precedence over the environment (used by tests and scripts).
    """
    return Settings(**overrides)


def setup_logging() -> logging.Logger:
    """
    Configure base logging for the app.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    )
    return logging.getLogger("docqa")


def public_settings(settings: Settings) -> Dict[str, Any]:
    """
    Return settings without secrets for safe logging/inspection.
    """
    return settings.model_dump(
        exclude={"openai_api_key"},
        exclude_none=True,
    )


__all__ = ["Settings", "load_settings", "setup_logging", "public_settings"]
