"""
tokenledger configuration.

Resolution order (highest priority first):
  1. YAML config file        (tokenledger.yaml), passed as keyword arguments
  2. Environment variables   (TOKENLEDGER_CURRENCY__BASE=EUR)
  3. Defaults defined here
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tokenledger.core.cost.money import CURRENCY_USD


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LogFormat(StrEnum):
    JSON = "json"
    CONSOLE = "console"


class LoggingSettings(BaseModel):
    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON


class CurrencySettings(BaseModel):
    base: str = CURRENCY_USD
    # Units of each currency per one unit of `base`
    rates: dict[str, float] = Field(default_factory=lambda: {CURRENCY_USD: 1.0})

    @field_validator("base")
    @classmethod
    def _upper_base(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("rates")
    @classmethod
    def _upper_rate_codes(cls, value: dict[str, float]) -> dict[str, float]:
        return {code.strip().upper(): rate for code, rate in value.items()}


class CatalogSettings(BaseModel):
    path: str | None = None
    include_defaults: bool = True


class TokenizerSettings(BaseModel):
    # model name -> tiktoken encoding name, for models tiktoken cannot map itself
    encodings: dict[str, str] = Field(default_factory=dict)


class Settings(BaseSettings):
    """Root settings: merges env vars, YAML, and defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TOKENLEDGER_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    currency: CurrencySettings = Field(default_factory=CurrencySettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    tokenizer: TokenizerSettings = Field(default_factory=TokenizerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Convenience alias for a flat env var
    log_level: str = ""

    def model_post_init(self, __context: Any) -> None:
        if self.log_level:
            self.logging.level = LogLevel(self.log_level.upper())


def _load_yaml_config() -> dict[str, Any]:
    """Load YAML config file if it exists."""
    search_paths = [
        Path("tokenledger.yaml"),
        Path("config/tokenledger.yaml"),
        Path("/etc/tokenledger/tokenledger.yaml"),
    ]
    for path in search_paths:
        if path.is_file():
            with open(path) as f:
                return yaml.safe_load(f) or {}
    return {}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    yaml_data = _load_yaml_config()
    return Settings(**yaml_data)
