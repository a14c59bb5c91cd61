"""
Library configuration using Pydantic Settings.
"""

import logging
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Catalog object settings loaded from environment variables."""

    # Decoding
    CATALOG_STRICT_JSON_KEYS: bool = True
    # Media API sends releaseDate where lastModifiedDate is expected
    CATALOG_RELEASE_DATE_COMPAT: bool = True

    # Diagnostics
    CATALOG_LEGACY_TYPE_PREFIX: str = "com.brightcove.proserve.mediaapi.wrapper.apiobjects"
    CATALOG_LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


settings = Settings()


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Apply the configured level to the package logger and return it."""
    logger = logging.getLogger("catalog_objects")
    logger.setLevel((level or settings.CATALOG_LOG_LEVEL or "WARNING").strip().upper())
    return logger
