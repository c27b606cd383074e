"""Configuration settings for profilekit."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings loaded from ``PROFILEKIT_*`` environment variables."""

    # Logging
    log_level: str = "INFO"

    # Metadata file names, canonical first
    metadata_file: str = "profile.yml"
    legacy_metadata_file: str = "metadata.ini"

    # Control directories, canonical first
    controls_dir: str = "controls"
    legacy_controls_dir: str = "test"

    # Archive destination (None = current working directory)
    archive_output_dir: Path | None = None

    model_config = {
        "env_prefix": "PROFILEKIT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
