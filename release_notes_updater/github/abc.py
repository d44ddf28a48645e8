"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from typing import Any


class GitHubClientBase(ABC):
    """Base ABC for GitHub clients."""

    # Pull Request Operations
    @abstractmethod
    async def get_pull_request(self, pull_request_number: int) -> Any:
        """Get a pull request for a repository."""
        pass

    # Release Operations
    @abstractmethod
    async def list_releases(self, per_page: int = 10, **kwargs: Any) -> list[Any]:
        """List the most recent releases for a repository."""
        pass

    @abstractmethod
    async def get_latest_release(self) -> Any | None:
        """Get the latest published release, or None if nothing was published yet."""
        pass

    @abstractmethod
    async def create_release(self, tag_name: str, name: str | None = None, body: str | None = None, draft: bool = True, **kwargs: Any) -> Any:
        """Create a release for a repository."""
        pass

    @abstractmethod
    async def update_release(self, release_id: int, body: str, **kwargs: Any) -> Any:
        """Overwrite the body of a release."""
        pass
