"""GitHub client adapter for the githubkit library."""

from functools import wraps
from pathlib import Path
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed
from githubkit.versions.latest.models import PullRequest, Release

from release_notes_updater.configuration.models import GitHubAuthenticationType
from release_notes_updater.utils.constants import DEFAULT_RELEASE_LIST_PAGE_SIZE
from release_notes_updater.utils.github import split_repository_in_configuration
from release_notes_updater.utils.retry import retry_on_rate_limit

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_github_422(func: F) -> F:
    """Decorator turning GitHub 422 Unprocessable Entity errors into a ValueError with the API's explanation."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            if exc.response.status_code != 422:
                raise
            try:
                error_data = exc.response.json()
            except ValueError:
                error_data = {}
            message = error_data.get("message", "Unprocessable Entity")
            errors = error_data.get("errors", [])
            logger.error("GitHub 422 Unprocessable Entity", function=func.__name__, message=message, errors=errors)
            raise ValueError(f"GitHub 422 error in {func.__name__}: {message} | errors: {errors}") from exc

    return wrapper  # type: ignore


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @classmethod
    async def create(
        cls,
        repo: str,
        github_auth_type: GitHubAuthenticationType,
        github_pat_token: str | None = None,
        github_app_id: int | None = None,
        github_app_private_key_path: Path | None = None,
        github_app_installation_id: int | None = None,
        github_api_url: str = "https://api.github.com",
    ) -> Self:
        """Create an adapter for ``repo`` ('owner/repo') authenticated with a PAT or a GitHub App."""
        owner, repo_name = await split_repository_in_configuration(repo=repo)
        logger.info("Creating client for GitHub repository", github_api_url=github_api_url, owner=owner, repo_name=repo_name)
        client = await get_github_client(
            repo=repo,
            github_auth_type=github_auth_type,
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
            github_api_url=github_api_url,
        )
        return cls(client, owner, repo_name)

    # Pull Request Operations
    @retry_on_rate_limit()
    async def get_pull_request(self, pull_request_number: int) -> PullRequest:
        """Get a pull request from the repository."""
        response: Response[PullRequest] = await self.client.rest.pulls.async_get(
            owner=self.owner, repo=self.repo_name, pull_number=pull_request_number
        )
        return response.parsed_data

    # Release Operations
    @retry_on_rate_limit()
    async def list_releases(self, per_page: int = DEFAULT_RELEASE_LIST_PAGE_SIZE, **kwargs: Any) -> list[Release]:
        """List the most recent releases (a single page), drafts included."""
        response: Response[list[Release]] = await self.client.rest.repos.async_list_releases(
            owner=self.owner,
            repo=self.repo_name,
            per_page=per_page,
            **kwargs,
        )
        releases: list[Release] = response.parsed_data
        logger.debug("Fetched releases", count=len(releases), drafts=[r.name for r in releases if r.draft])
        return releases

    @retry_on_rate_limit()
    async def get_latest_release(self) -> Release | None:
        """Get the latest published release, or None when the repository has none."""
        try:
            response: Response[Release] = await self.client.rest.repos.async_get_latest_release(owner=self.owner, repo=self.repo_name)
        except RequestFailed as exc:
            if exc.response.status_code == 404:
                logger.info("Repository has no published release", owner=self.owner, repo=self.repo_name)
                return None
            raise
        return response.parsed_data

    @handle_github_422
    @retry_on_rate_limit()
    async def create_release(
        self,
        tag_name: str,
        name: str | None = None,
        body: str | None = None,
        draft: bool = True,
        **kwargs: Any,
    ) -> Release:
        """Create a (by default draft) release."""
        params = {k: v for k, v in dict(name=name, body=body, **kwargs).items() if v is not None}
        response: Response[Release] = await self.client.rest.repos.async_create_release(
            owner=self.owner,
            repo=self.repo_name,
            tag_name=tag_name,
            draft=draft,
            **params,
        )
        logger.info("Created release", tag_name=tag_name, draft=draft)
        return response.parsed_data

    @handle_github_422
    @retry_on_rate_limit()
    async def update_release(self, release_id: int, body: str, **kwargs: Any) -> Release:
        """Overwrite the body of a release."""
        response: Response[Release] = await self.client.rest.repos.async_update_release(
            owner=self.owner,
            repo=self.repo_name,
            release_id=release_id,
            body=body,
            **kwargs,
        )
        return response.parsed_data
