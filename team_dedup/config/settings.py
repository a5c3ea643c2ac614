import logging
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from team_dedup.models.enums import StorageBackend

VALID_LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Storage Configuration
    storage_backend: StorageBackend = Field(
        StorageBackend.MONGO, description="Which store holds the teams collection."
    )
    mongo_uri: str = Field(
        "mongodb://localhost:27017", description="Connection string for MongoDB."
    )
    mongo_database: str = Field("fh-aaa", description="Database holding the teams.")
    teams_collection: str = Field(
        "teams", description="Collection (or table) holding the team documents."
    )
    supabase_url: Optional[str] = Field(
        None, description="URL for the Supabase project."
    )
    supabase_key: Optional[str] = Field(
        None, description="Service role key for Supabase (use with caution!)."
    )

    # Safety guard: the run aborts unless the store targets this dataset
    expected_dataset: str = Field(
        "fh-aaa", description="Name of the dataset the run must target."
    )

    # Remediation Settings
    domain: Optional[str] = Field(
        None, description="Customer domain used as prefix of migrated team codes."
    )
    dryrun: bool = Field(
        True, description="Report the intended updates without applying them."
    )
    hierarchy_levels: List[str] = Field(
        default_factory=list,
        description="Business-object hierarchy labels, top-most first, deepest last.",
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


class RunConfig(BaseModel):
    """Configuration of a single remediation run, handed to the resolver."""

    domain: Optional[str] = None
    dryrun: bool = True
    expected_dataset: str = "fh-aaa"
    hierarchy_levels: List[str] = Field(default_factory=list)

    @classmethod
    def from_settings(cls, app_settings: AppSettings, **overrides) -> "RunConfig":
        """Builds a run config from settings, letting non-None overrides win."""
        values = {
            "domain": app_settings.domain,
            "dryrun": app_settings.dryrun,
            "expected_dataset": app_settings.expected_dataset,
            "hierarchy_levels": list(app_settings.hierarchy_levels),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
    except ValidationError as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")

    log_level_upper = settings.log_level.upper()
    # Validate log_level even if loaded from .env
    if log_level_upper not in VALID_LOG_LEVELS:
        logging.warning(
            f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
        )
        settings.log_level = "INFO"
    else:
        settings.log_level = log_level_upper
    return settings


settings: AppSettings = load_settings()
