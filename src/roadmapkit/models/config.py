"""Configuration models."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ROADMAP_FILENAME = "roadmap.json"
DEFAULT_MAX_COMMITS = 50


class ScanConfig(BaseModel):
    """Configuration for a single scan of a project repository."""

    project_root: Path = Field(..., description="Path to the project's Git working tree")
    roadmap_filename: str = Field(
        default=DEFAULT_ROADMAP_FILENAME,
        description="Roadmap file name, relative to the project root",
    )
    max_commits: int = Field(
        default=DEFAULT_MAX_COMMITS,
        ge=1,
        description="Maximum number of commits to walk, newest first",
    )
    branch: str = Field("HEAD", description="Revision to walk history from")

    @property
    def roadmap_path(self) -> Path:
        return self.project_root / self.roadmap_filename

    @classmethod
    def from_settings(cls, project_root: Path, settings: Optional["Settings"] = None) -> "ScanConfig":
        """Build a scan configuration from environment settings."""
        settings = settings or Settings()
        return cls(
            project_root=project_root,
            roadmap_filename=settings.roadmap_filename,
            max_commits=settings.max_commits,
        )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "project_root": "/path/to/project",
                "roadmap_filename": "roadmap.json",
                "max_commits": 50,
                "branch": "HEAD",
            }
        }
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are prefixed with ROADMAP_ (e.g., ROADMAP_MAX_COMMITS).
    """

    model_config = SettingsConfigDict(
        env_prefix="ROADMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Scanner Settings
    max_commits: int = Field(default=DEFAULT_MAX_COMMITS, ge=1)
    roadmap_filename: str = DEFAULT_ROADMAP_FILENAME

    # Logging
    log_level: str = "WARNING"
