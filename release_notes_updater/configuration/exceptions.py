"""Contains exceptions raised when reconciling application configuration."""


class GitHubAuthenticationConfigurationUndefinedError(Exception):
    """Raised when the GitHub authentication configuration is undefined, incomplete or ambiguous."""

    pass


class InvalidVersionBumpError(ValueError):
    """Raised when a configured version bump category is not major, minor or patch."""

    def __init__(self, value: str) -> None:
        """Initializes the exception with the rejected bump category."""
        super().__init__(f"Unknown version bump category '{value}' - expected one of major, minor, patch")
        self.value = value
