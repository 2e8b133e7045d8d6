"""Configuration data models."""

import os
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PathsConfig(BaseModel):
    """Source and destination directories."""

    import_root: str = Field(..., description="Directory holding folders waiting for import")
    storage_root: str = Field(..., description="Permanent album storage directory")

    @field_validator("import_root", "storage_root")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand environment variables and ~ in paths."""
        return os.path.expanduser(os.path.expandvars(v))


class CatalogConfig(BaseModel):
    """Catalog database configuration."""

    url: str = Field(
        default="sqlite+aiosqlite:///./catalog.db", description="SQLAlchemy async database URL"
    )
    echo: bool = Field(default=False, description="Echo SQL statements")
    create_tables: bool = Field(default=True, description="Create missing tables on startup")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Expand environment variables in the database URL."""
        return os.path.expandvars(v)


class ParsingConfig(BaseModel):
    """Confidence constants assigned by the folder name parser."""

    exact_studio_confidence: int = Field(default=90, ge=0, le=100)
    exact_model_confidence: int = Field(default=85, ge=0, le=100)
    exact_overall_confidence: int = Field(default=88, ge=0, le=100)
    bracket_studio_confidence: int = Field(default=90, ge=0, le=100)
    bracket_model_confidence: int = Field(default=85, ge=0, le=100)
    at_separator_confidence: int = Field(default=70, ge=0, le=100)
    hyphen_separator_confidence: int = Field(default=60, ge=0, le=100)
    text_extraction_confidence: int = Field(default=60, ge=0, le=100)
    human_verified_confidence: int = Field(
        default=95, ge=0, le=100, description="Confidence given to operator-edited fields"
    )


class TierConfig(BaseModel):
    """Confidence tier thresholds."""

    high_threshold: int = Field(default=80, ge=0, le=100, description="Minimum for high tier")
    medium_threshold: int = Field(default=50, ge=0, le=100, description="Minimum for medium tier")

    @model_validator(mode="after")
    def validate_order(self) -> "TierConfig":
        """Medium threshold must sit below the high threshold."""
        if self.medium_threshold >= self.high_threshold:
            raise ValueError(
                f"medium_threshold ({self.medium_threshold}) must be lower than "
                f"high_threshold ({self.high_threshold})"
            )
        return self


class ImportConfig(BaseModel):
    """Import executor configuration."""

    batch_size: int = Field(default=10, gt=0, description="Items imported concurrently per batch")
    require_media_content: bool = Field(
        default=False, description="Skip source folders without image or video files"
    )
    media_extensions: List[str] = Field(
        default_factory=lambda: [
            ".jpg",
            ".jpeg",
            ".png",
            ".gif",
            ".webp",
            ".mp4",
            ".mov",
            ".avi",
            ".mkv",
        ],
        description="Extensions counted as media content",
    )
    resource_url_scheme: str = Field(
        default="local", description="Scheme of the placeholder resource URL"
    )

    @field_validator("media_extensions")
    @classmethod
    def normalize_extensions(cls, v: List[str]) -> List[str]:
        """Lowercase extensions and ensure a leading dot."""
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )
    file: Optional[str] = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, gt=0, description="Maximum log file size in MB")
    backup_count: int = Field(default=5, ge=0, description="Number of backup log files")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Logging level must be one of: {allowed}")
        return v.upper()


class AppConfig(BaseModel):
    """Application behavior configuration."""

    dry_run: bool = Field(default=False, description="Run in dry-run mode")
    interactive: bool = Field(default=True, description="Enable interactive review")


class Config(BaseModel):
    """Main configuration model."""

    paths: PathsConfig = Field(..., description="Directory configuration")
    catalog: CatalogConfig = Field(
        default_factory=CatalogConfig, description="Catalog database configuration"
    )
    parsing: ParsingConfig = Field(
        default_factory=ParsingConfig, description="Parser confidence constants"
    )
    tiers: TierConfig = Field(default_factory=TierConfig, description="Confidence tiers")
    import_config: ImportConfig = Field(
        default_factory=ImportConfig, alias="import", description="Import configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    app: AppConfig = Field(default_factory=AppConfig, description="Application configuration")

    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
    )
