"""Reconcile configuration between CLI arguments and environment settings."""

from pathlib import Path

import structlog

from release_notes_updater.configuration.env import Settings
from release_notes_updater.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    InvalidVersionBumpError,
)
from release_notes_updater.configuration.models import GitHubAuthenticationType, ReleaseNotesConfig
from release_notes_updater.release_notes.detector import VersionBump

logger = structlog.get_logger(__name__)

_APP_SETTINGS = (
    ("GitHub App ID", "github_app_id", "GITHUB_APP_ID"),
    ("GitHub App private key path", "github_app_private_key_path", "GITHUB_APP_PRIVATE_KEY_PATH"),
    ("GitHub App installation ID", "github_app_installation_id", "GITHUB_APP_INSTALLATION_ID"),
)


async def validate_github_authentication_configuration(
    github_pat_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
    github_app_installation_id: int | None,
) -> GitHubAuthenticationType:
    """Validates the GitHub authentication configuration.

    Args:
        github_pat_token (str | None): The GitHub PAT token.
        github_app_id (int | None): The GitHub App ID.
        github_app_private_key_path (Path | None): The path to the GitHub App private key.
        github_app_installation_id (int | None): The GitHub App installation ID.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If both or neither of PAT and App
            configurations are defined, or the App configuration is incomplete.

    Returns:
        GitHubAuthenticationType: The type of GitHub authentication used.
    """
    app_values = (github_app_id, github_app_private_key_path, github_app_installation_id)
    if github_pat_token and any(app_values):
        raise GitHubAuthenticationConfigurationUndefinedError("Both PAT and GitHub App configurations are defined. Please use one or the other.")

    if github_pat_token:
        return GitHubAuthenticationType.PAT

    if all(app_values):
        return GitHubAuthenticationType.APP

    if any(app_values):
        missing = [
            f"{name} (command line option {cli_name}, environment variable {env_name})"
            for (name, cli_name, env_name), value in zip(_APP_SETTINGS, app_values)
            if not value
        ]
        raise GitHubAuthenticationConfigurationUndefinedError("Incomplete GitHub App configuration - missing settings include " + ", ".join(missing))

    raise GitHubAuthenticationConfigurationUndefinedError(
        "No GitHub authentication configuration provided. Please provide either a PAT or a GitHub App configuration."
    )


def validate_version_bumps(default_bump: str, label_bumps: dict[str, str]) -> None:
    """Ensure every configured bump category is one the version detector understands."""
    valid = {bump.value for bump in VersionBump}
    for value in (default_bump, *label_bumps.values()):
        if value not in valid:
            raise InvalidVersionBumpError(value)


async def reconcile_release_notes_configuration(
    settings: Settings,
    cli_repo: str | None = None,
    cli_github_api_url: str | None = None,
    cli_github_pat_token: str | None = None,
    cli_github_app_id: int | None = None,
    cli_github_app_private_key_path: Path | None = None,
    cli_github_app_installation_id: int | None = None,
    cli_docs_base_url: str | None = None,
) -> ReleaseNotesConfig:
    """Combine CLI arguments with environment settings, CLI arguments taking precedence."""
    repo = cli_repo or settings.REPO
    if not repo:
        raise ValueError("A repository in the format 'owner/repo' is required (argument REPO or environment variable REPO).")

    github_pat_token = cli_github_pat_token or settings.GITHUB_PAT_TOKEN
    github_app_id = cli_github_app_id or settings.GITHUB_APP_ID
    github_app_private_key_path = cli_github_app_private_key_path or settings.GITHUB_APP_PRIVATE_KEY_PATH
    github_app_installation_id = cli_github_app_installation_id or settings.GITHUB_APP_INSTALLATION_ID
    auth_type = await validate_github_authentication_configuration(
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
    )

    validate_version_bumps(settings.DEFAULT_VERSION_BUMP, settings.VERSION_BUMP_LABELS)
    config = ReleaseNotesConfig(
        repo=repo,
        github_authentication_type=auth_type,
        github_api_url=cli_github_api_url or settings.GITHUB_API_URL,
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
        docs_base_url=cli_docs_base_url or settings.DOCS_BASE_URL,
        release_list_page_size=settings.RELEASE_LIST_PAGE_SIZE,
        default_version_bump=settings.DEFAULT_VERSION_BUMP,
        version_bump_labels=dict(settings.VERSION_BUMP_LABELS),
    )
    logger.debug("Reconciled configuration", repo=config.repo, auth_type=auth_type.value, docs_base_url=config.docs_base_url)
    return config
