"""
Application settings loaded from environment variables.

This module uses Pydantic Settings to manage configuration from:
1. Environment variables
2. .env file
3. Default values

The OpenAI API key and the Qdrant URL have no defaults: if either is
missing, Settings() raises a ValidationError and the entry points treat
that as a fatal configuration error.
"""

from pathlib import Path
from functools import lru_cache
from typing import Optional
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from qdrant_client.http.models import Distance


class Settings(BaseSettings):
    """
    Application settings with type validation.

    All settings can be overridden via environment variables or .env file.
    For example, to search another collection, set COLLECTION_NAME=my-shop
    """

    # Embedding service (OpenAI-compatible)
    openai_api_key: str
    openai_base_url: Optional[str] = None
    embedding_model: str = "text-embedding-ada-002"
    embedding_dimensions: int = 1536

    # Qdrant vector store
    # QDRANT_API_URL is the name older .env files use
    qdrant_url: str = Field(
        validation_alias=AliasChoices("qdrant_url", "qdrant_api_url")
    )
    qdrant_api_key: Optional[str] = None
    collection_name: str = "ecommerce-chatbot"
    # Must be a Qdrant distance name: Cosine, Dot, Euclid or Manhattan
    distance: Distance = Distance.COSINE

    # Search and request limits
    top_k: int = 5
    request_timeout: float = 30.0

    # Ingestion
    catalog_path: Optional[Path] = None

    # CLI
    log_level: str = "WARNING"
    history_file: Path = Path(".chat_history")

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.
    Call it from entry points only and pass the result to the clients.

    Returns:
        Settings: The application settings

    Raises:
        pydantic.ValidationError: If a required setting is missing
    """
    return Settings()


def describe_missing(error) -> str:
    """
    Turn a settings ValidationError into a one-line message.

    Args:
        error: pydantic.ValidationError raised by Settings()

    Returns:
        str: Comma-separated environment variable names that failed
    """
    fields = []
    for item in error.errors():
        name = str(item["loc"][0]) if item.get("loc") else "?"
        fields.append(name.upper())
    return ", ".join(fields)
