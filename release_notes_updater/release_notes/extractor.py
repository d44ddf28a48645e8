"""Extract the pull request data a release notes update needs."""

from typing import Any

import structlog
from pydantic import BaseModel, Field

from ..github.abc import GitHubClientBase
from .parser import extract_release_notes_fragment

logger = structlog.get_logger(__name__)


class PullRequestContext(BaseModel):
    """Everything about a merged pull request that feeds the release notes merge."""

    number: int
    body: str | None = None
    author_login: str = ""
    is_external_author: bool = False
    labels: list[str] = Field(default_factory=list)
    milestone: str | None = None

    @property
    def release_notes_fragment(self) -> str | None:
        """Release notes written under the pull request's ``## Release notes`` heading."""
        return extract_release_notes_fragment(self.body)


def _head_repo_is_fork(pull_request: Any) -> bool:
    head = getattr(pull_request, "head", None)
    repo = getattr(head, "repo", None)
    return bool(getattr(repo, "fork", False))


class DataExtractor:
    """Extracts pull request data from GitHub."""

    def __init__(self, adapter: GitHubClientBase):
        """Initialize with GitHub adapter."""
        self.adapter = adapter

    async def extract_pull_request(self, pr_number: int) -> PullRequestContext:
        """Fetch a pull request and reduce it to a PullRequestContext.

        The author counts as external when the pull request's head repository
        is a fork of the base repository.
        """
        pull_request = await self.adapter.get_pull_request(pr_number)

        user = getattr(pull_request, "user", None)
        milestone = getattr(pull_request, "milestone", None)
        context = PullRequestContext(
            number=pr_number,
            body=getattr(pull_request, "body", None),
            author_login=getattr(user, "login", None) or "",
            is_external_author=_head_repo_is_fork(pull_request),
            labels=[label.name for label in getattr(pull_request, "labels", None) or [] if getattr(label, "name", None)],
            milestone=getattr(milestone, "title", None) if milestone else None,
        )
        logger.info(
            "Fetched pull request",
            pr_number=pr_number,
            author=context.author_login,
            external=context.is_external_author,
            labels=context.labels,
            milestone=context.milestone,
        )
        return context
