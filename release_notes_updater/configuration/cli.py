"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from release_notes_updater.configuration.env import get_settings
from release_notes_updater.configuration.reconcile import reconcile_release_notes_configuration
from release_notes_updater.github.adapter import GitHubKitAdapter
from release_notes_updater.release_notes.merger import merge_release_notes
from release_notes_updater.release_notes.models import ReleaseNotesStatus
from release_notes_updater.release_notes.parser import extract_release_notes_fragment
from release_notes_updater.release_notes.updater import ReleaseNotesUpdater
from release_notes_updater.utils.constants import DEFAULT_DOCS_BASE_URL

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Keep the draft release notes up to date as pull requests land.")


@typer_app.command(name="update")
def update_cli(
    repo: Annotated[str, Argument(envvar="REPO", help="Repository name (owner/repo).")],
    pr_number: Annotated[int, Argument(envvar="PR_NUMBER", help="Number of the merged pull request.")],
    dry_run: Annotated[bool, Option("--dry-run", help="Print the merged release body instead of saving it.")] = False,
    docs_base_url: Annotated[str | None, Option(envvar="DOCS_BASE_URL", help="Documentation root for component links.")] = None,
    github_api_url: Annotated[str, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = "https://api.github.com",
    github_pat_token: Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    github_app_id: Annotated[int | None, Option(envvar="GITHUB_APP_ID", help="GitHub App ID.")] = None,
    github_app_private_key_path: Annotated[Path | None, Option(envvar="GITHUB_APP_PRIVATE_KEY_PATH", help="Path to GitHub App private key.")] = None,
    github_app_installation_id: Annotated[int | None, Option(envvar="GITHUB_APP_INSTALLATION_ID", help="GitHub App Installation ID.")] = None,
) -> None:
    """Merge the release notes of a merged pull request into the draft release."""
    config = asyncio.run(
        reconcile_release_notes_configuration(
            settings=get_settings(),
            cli_repo=repo,
            cli_github_api_url=github_api_url,
            cli_github_pat_token=github_pat_token,
            cli_github_app_id=github_app_id,
            cli_github_app_private_key_path=github_app_private_key_path,
            cli_github_app_installation_id=github_app_installation_id,
            cli_docs_base_url=docs_base_url,
        )
    )

    async def run_update() -> None:
        adapter = await GitHubKitAdapter.create(
            repo=config.repo,
            github_auth_type=config.github_authentication_type,
            github_pat_token=config.github_pat_token,
            github_app_id=config.github_app_id,
            github_app_private_key_path=config.github_app_private_key_path,
            github_app_installation_id=config.github_app_installation_id,
            github_api_url=config.github_api_url,
        )
        result = await ReleaseNotesUpdater(adapter, config).update(pr_number, dry_run=dry_run)

        if result.status == ReleaseNotesStatus.ERROR:
            typer.echo(f"Failed to update release notes for #{pr_number}: {result.error}", err=True)
            raise typer.Exit(1)
        if result.status == ReleaseNotesStatus.DRY_RUN:
            typer.echo(result.body or "")
            return
        if result.created_release:
            typer.echo(f"Created draft release v{result.version}")
        if result.status == ReleaseNotesStatus.NEEDS_DESCRIPTION:
            typer.echo(f"Pull request #{pr_number} has no release notes - added it to the list of changes to describe")
        typer.echo(f"Updated release notes of v{result.version} (release {result.release_id})")

    asyncio.run(run_update())


@typer_app.command(name="merge")
def merge_cli(
    release_body_path: Annotated[Path, Argument(help="File with the current release body.")],
    pull_request_body_path: Annotated[Path, Argument(help="File with the pull request description.")],
    version: Annotated[str, Option("--version", help="Version of the draft release, e.g. 6.6.0.")],
    pr_number: Annotated[int, Option("--pr-number", help="Number of the merged pull request.")],
    author: Annotated[str, Option("--author", help="Login of the pull request author.")],
    external: Annotated[bool, Option("--external", help="The pull request comes from a fork.")] = False,
    docs_base_url: Annotated[str, Option(envvar="DOCS_BASE_URL", help="Documentation root for component links.")] = DEFAULT_DOCS_BASE_URL,
    output: Annotated[Path | None, Option("--output", "-o", help="Write the merged body to this file instead of stdout.")] = None,
) -> None:
    """Merge a pull request description into a release body read from local files."""
    for path in (release_body_path, pull_request_body_path):
        if not path.exists():
            typer.echo(f"File not found: {path.absolute()}", err=True)
            raise typer.Exit(1)

    # newline="" keeps CRLF line endings of previously merged bodies intact.
    with open(release_body_path, encoding="utf-8", newline="") as f:
        release_body = f.read()
    with open(pull_request_body_path, encoding="utf-8", newline="") as f:
        pull_request_body = f.read()

    outcome = merge_release_notes(
        release_body,
        extract_release_notes_fragment(pull_request_body),
        version=version.lstrip("vV"),
        pr_number=pr_number,
        author_login=author,
        is_external_author=external,
        docs_base_url=docs_base_url,
    )
    if outcome.used_fallback:
        typer.echo(f"Pull request #{pr_number} has no release notes", err=True)

    if output is None:
        typer.echo(outcome.body, nl=False)
    else:
        with open(output, "w", encoding="utf-8", newline="") as f:
            f.write(outcome.body)
        typer.echo(f"Wrote merged release notes to {output}")


if __name__ == "__main__":
    typer_app()
