"""Contains utility functions for GitHub interactions."""


async def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Split an 'owner/repo' string into its owner and repository name."""
    if not repo or not repo.strip("/"):
        raise ValueError("A repository in the format 'owner/repo' is required.")
    owner, _, repository = repo.strip("/").partition("/")
    if not owner or not repository or "/" in repository:
        raise ValueError(f"Repository must be in the format 'owner/repo' with no extra parts, got '{repo}'.")
    return owner, repository
