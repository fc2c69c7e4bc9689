import logging
from pathlib import Path
from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Gemini Configuration
    gemini_api_key: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("gemini_api_key", "api_key"),
        description="API key for the Gemini text-generation API.",
    )
    gemini_model: str = Field(
        "gemini-3-flash-preview", description="Model used for scouting reports."
    )
    gemini_api_base_url: str = Field(
        "https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Generative Language REST API.",
    )
    gemini_timeout: float = Field(
        30.0, gt=0, description="Request timeout in seconds for Gemini calls."
    )
    report_language: str = Field(
        "Português de Portugal", description="Language the report is written in."
    )

    # Extraction Settings
    variant: Literal["single", "multi"] = Field(
        "multi", description="Extraction profile (single-team or multi-team)."
    )
    player_alignment: Literal["container", "index"] = Field(
        "container",
        description="Pair player fields by shared container or by list position.",
    )

    # Storage Configuration
    storage_backend: Literal["file", "supabase"] = Field(
        "file", description="Where the team collection is persisted."
    )
    storage_path: Path = Field(
        Path("teamhub_data.json"), description="JSON file used by the file store."
    )
    storage_key: str = Field(
        "teamhub_pro_data", description="Fixed key the collection is stored under."
    )
    supabase_url: Optional[str] = Field(None, description="URL for the Supabase project.")
    supabase_key: Optional[str] = Field(None, description="Anon key for the Supabase project.")
    supabase_table: str = Field(
        "kv_store", description="Key/value table holding the serialized collection."
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
