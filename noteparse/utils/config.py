"""Configuration management using Pydantic for validation."""

from pathlib import Path
from typing import Any, Dict, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SpacyConfig(BaseSettings):
    """spaCy named-span tagger configuration."""

    model_config = SettingsConfigDict(env_prefix="NOTEPARSE_SPACY_")

    model: str = "en_core_web_sm"
    person_labels: list[str] = ["PERSON"]
    company_labels: list[str] = ["ORG"]
    location_labels: list[str] = ["GPE", "LOC", "FAC"]


class DateConfig(BaseSettings):
    """Natural-language date parsing configuration."""

    model_config = SettingsConfigDict(env_prefix="NOTEPARSE_DATES_")

    timezone: str = "UTC"
    implied_hour: int = Field(default=12, ge=0, le=23)
    tonight_hour: int = Field(default=20, ge=0, le=23)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate the time zone name resolves to an IANA zone."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {v}") from exc
        return v


class LinkingConfig(BaseSettings):
    """Commitment-to-deadline linking configuration."""

    model_config = SettingsConfigDict(env_prefix="NOTEPARSE_LINKING_")

    window_chars: int = Field(default=100, gt=0)


class ExtractionConfig(BaseSettings):
    """Entity extraction configuration."""

    model_config = SettingsConfigDict(env_prefix="NOTEPARSE_EXTRACTION_")

    spacy: SpacyConfig = Field(default_factory=SpacyConfig)
    dates: DateConfig = Field(default_factory=DateConfig)
    linking: LinkingConfig = Field(default_factory=LinkingConfig)

    enable_people: bool = True
    enable_companies: bool = True
    enable_locations: bool = True
    enable_dates: bool = True
    enable_commitments: bool = True
    enable_relationship_signals: bool = True
    enable_contacts: bool = True


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="NOTEPARSE_LOG_")

    level: str = "INFO"
    format: Literal["json", "text"] = "text"
    file: str | None = None
    max_size_mb: int = 10
    backup_count: int = 5


class Config(BaseSettings):
    """Main configuration class."""

    model_config = SettingsConfigDict(
        env_prefix="NOTEPARSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @staticmethod
    def _deep_merge_dict(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
        """Deep-merge two dicts (overrides win)."""
        merged: Dict[str, Any] = dict(base)
        for key, value in overrides.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = Config._deep_merge_dict(merged[key], value)
            else:
                merged[key] = value
        return merged

    @classmethod
    def from_yaml(cls, yaml_path: str | Path = "config/config.yaml") -> "Config":
        """Load configuration from YAML file and environment variables.

        Precedence (highest to lowest):
        1) Environment variables / .env
        2) YAML file
        3) Model defaults

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            ValueError: If the YAML root is not a mapping
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        with open(yaml_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        if not isinstance(yaml_config, dict):
            raise ValueError(f"YAML config root must be a mapping/dict: {yaml_path}")

        # Only values that differ from the defaults came from the environment.
        env_overrides = cls().model_dump(exclude_defaults=True)
        merged = cls._deep_merge_dict(yaml_config, env_overrides)

        return cls(**merged)


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Raises:
        RuntimeError: If configuration hasn't been initialized
    """
    if _config is None:
        raise RuntimeError("Configuration not initialized. Call load_config() first.")
    return _config


def load_config(yaml_path: str | Path = "config/config.yaml") -> Config:
    """Load configuration from YAML (plus environment) and install it globally."""
    global _config
    _config = Config.from_yaml(yaml_path)
    return _config


def reset_config() -> None:
    """Reset global configuration (mainly for testing)."""
    global _config
    _config = None
