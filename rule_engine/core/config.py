"""Application configuration."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_RULES_FILE = Path(__file__).resolve().parents[1] / "rules" / "data" / "show_without_vat.json"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # API
    app_name: str = "Rule Engine"

    # Rules
    rules_file: str = str(DEFAULT_RULES_FILE)
    node_mode: Literal["strict", "precedence"] = "strict"
    validate_operators: bool = True
    max_depth: int = 100

    # Logging
    log_level: str = "info"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_prefix="RULE_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
