"""Configuration management using Pydantic settings."""

import logging
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Suffixes the loader knows how to decode.
JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    app_name: str = "VM Template Model"
    debug: bool = False
    log_level: str = "INFO"

    # Template loading settings
    template_strict_checks: bool = False  # Raise advisory check warnings as errors
    template_max_document_bytes: int = 1024 * 1024
    template_default_encoding: str = "utf-8"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    def get_log_level(self) -> int:
        """Resolve the effective logging level; DEBUG wins when debug is on."""
        if self.debug:
            return logging.DEBUG
        level = logging.getLevelName(self.log_level.strip().upper())
        return level if isinstance(level, int) else logging.INFO


settings = Settings()


def configure_logging(config: Optional[Settings] = None) -> None:
    """Configure root logging for processes that embed the template model."""
    config = config or settings
    logging.basicConfig(
        level=config.get_log_level(),
        format=LOG_FORMAT,
    )
