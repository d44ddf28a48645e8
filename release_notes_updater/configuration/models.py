"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from release_notes_updater.utils.constants import (
    DEFAULT_DOCS_BASE_URL,
    DEFAULT_RELEASE_LIST_PAGE_SIZE,
    DEFAULT_VERSION_BUMP_LABELS,
)


class GitHubAuthenticationType(str, Enum):
    """Enum for GitHub authentication types."""

    PAT = "pat"
    APP = "app"


@dataclass
class ReleaseNotesConfig:
    """Resolved configuration for a release notes update run."""

    repo: str
    github_authentication_type: GitHubAuthenticationType
    github_api_url: str = "https://api.github.com"
    github_pat_token: str | None = None
    github_app_id: int | None = None
    github_app_private_key_path: Path | None = None
    github_app_installation_id: int | None = None
    docs_base_url: str = DEFAULT_DOCS_BASE_URL
    release_list_page_size: int = DEFAULT_RELEASE_LIST_PAGE_SIZE
    default_version_bump: str = "minor"
    version_bump_labels: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_VERSION_BUMP_LABELS))
