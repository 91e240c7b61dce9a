"""URL helpers: input normalization, repository resolution and manifest lookup.

All functions here are pure; they never touch the network.
"""

import re
from typing import Optional, Sequence
from urllib.parse import urlparse

from specalyzer.models import SourceReference, StructuredSource, UrlSource

_SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)

GITHUB_HOSTS = ("github.com", "www.github.com")
RAW_MANIFEST_URL = "https://raw.githubusercontent.com/{owner}/{repo}/{branch}/package.json"


def normalize_url(text: str) -> str:
    """Normalize user input into an absolute URL.

    Prepends ``https://`` when no http(s) scheme is present and strips one
    trailing slash. The host is not validated.

    Args:
        text: A URL or bare domain as typed by the user.

    Returns:
        The normalized URL.
    """
    url = text.strip()
    if not _SCHEME_PATTERN.match(url):
        url = "https://" + url
    if url.endswith("/"):
        url = url[:-1]
    return url


def is_repository_url(url: str) -> bool:
    """Return True if the URL already points at a GitHub repository."""
    return "github.com" in url.lower()


def resolve_repo_url(source: Optional[SourceReference]) -> Optional[str]:
    """Resolve a repository pointer to a single repository URL.

    Plain URL references are passed through unchanged. Structured
    references are only understood for GitHub; any other host yields None
    so the caller can fall back to the analysed URL.

    Args:
        source: Repository pointer extracted from the site configuration.

    Returns:
        Repository URL, or None if the reference cannot be resolved.

    Raises:
        TypeError: If ``source`` is not a known reference type.
    """
    if source is None:
        return None
    if isinstance(source, UrlSource):
        return source.url
    if isinstance(source, StructuredSource):
        if not (source.host and source.account and source.repo):
            return None
        if source.host.lower() != "github":
            return None
        return f"https://github.com/{source.account}/{source.repo}"
    raise TypeError(f"Unsupported source reference: {source!r}")


def parse_github_url(url: str) -> Optional[tuple[str, str]]:
    """Parse a GitHub URL to extract owner and repository name.

    Trailing ``.git`` and any path segments after the repository name are
    ignored.

    Args:
        url: GitHub repository URL.

    Returns:
        Tuple of (owner, repo) if valid GitHub URL, None otherwise.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        return None
    if parsed.netloc.lower() not in GITHUB_HOSTS:
        return None

    parts = parsed.path.strip("/").split("/")
    if len(parts) < 2:
        return None

    owner, repo = parts[0], parts[1]
    if repo.endswith(".git"):
        repo = repo[:-4]
    if not owner or not repo:
        return None

    return (owner, repo)


def canonical_repo_url(url: str) -> Optional[str]:
    """Return ``https://github.com/{owner}/{repo}`` for a GitHub URL, else None."""
    parsed = parse_github_url(url)
    if parsed is None:
        return None
    owner, repo = parsed
    return f"https://github.com/{owner}/{repo}"


def manifest_urls(
    repo_url: str, branches: Sequence[str] = ("main", "master")
) -> Optional[list[str]]:
    """Build the raw package.json URLs of a GitHub repository.

    Args:
        repo_url: GitHub repository URL, optionally ending in ``.git``.
        branches: Branch names to try, in order.

    Returns:
        One raw URL per branch in the given order, or None for non-GitHub
        repositories.
    """
    parsed = parse_github_url(repo_url)
    if parsed is None:
        return None
    owner, repo = parsed
    return [
        RAW_MANIFEST_URL.format(owner=owner, repo=repo, branch=branch)
        for branch in branches
    ]
