"""Pydantic Settings model for application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from release_notes_updater.utils.constants import DEFAULT_DOCS_BASE_URL, DEFAULT_RELEASE_LIST_PAGE_SIZE


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # GitHub API settings
    GITHUB_API_URL: str = "https://api.github.com"
    REPO: str | None = None

    # GitHub PAT settings
    GITHUB_PAT_TOKEN: str | None = None

    # GitHub App settings
    GITHUB_APP_ID: int | None = None
    GITHUB_APP_PRIVATE_KEY_PATH: Path | None = None
    GITHUB_APP_INSTALLATION_ID: int | None = None

    # Release notes settings
    DOCS_BASE_URL: str = DEFAULT_DOCS_BASE_URL
    RELEASE_LIST_PAGE_SIZE: int = DEFAULT_RELEASE_LIST_PAGE_SIZE
    DEFAULT_VERSION_BUMP: str = "minor"
    VERSION_BUMP_LABELS: dict[str, str] = {"major": "major", "minor": "minor", "patch": "patch"}


def get_settings() -> Settings:
    """Read the settings from the environment and the ``.env`` file."""
    return Settings()
