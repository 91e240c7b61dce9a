"""Exceptions raised while fetching and interpreting a specification site."""

from typing import Optional


class SpecalyzerError(Exception):
    """Base class for all specalyzer errors."""


class FetchError(SpecalyzerError):
    """Raised when a request fails or returns an unexpected status.

    Covers transport failures (DNS, refused connection, timeout) as well
    as responses that the caller cannot interpret.
    """

    def __init__(
        self, url: str, message: str, status: Optional[int] = None
    ) -> None:
        self.url = url
        self.status = status
        super().__init__(message)


class ManifestError(FetchError):
    """Raised when a package.json candidate cannot be fetched or parsed."""


class UnsupportedRepositoryError(SpecalyzerError):
    """Raised when no manifest location can be derived from a repository URL.

    Only GitHub repositories are supported.
    """

    def __init__(self, repo_url: Optional[str], message: Optional[str] = None) -> None:
        self.repo_url = repo_url
        if message is None:
            message = "Could not construct raw package.json URL from repo URL."
        super().__init__(message)
