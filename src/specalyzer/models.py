"""Core data models for specalyzer.

This module defines the data structures passed between the analysis
stages: the repository pointer found in a site's configuration, the
build-tool classification, the version archive probe and the aggregate
analysis result.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union


@dataclass(frozen=True)
class UrlSource:
    """Repository pointer given as a plain URL string.

    Attributes:
        url: Repository URL exactly as found in the site configuration.
    """

    url: str


@dataclass(frozen=True)
class StructuredSource:
    """Repository pointer given as a ``{host, account, repo}`` object.

    Attributes:
        host: Hosting service identifier (e.g., "github").
        account: Account or organisation owning the repository.
        repo: Repository name.
    """

    host: str
    account: str
    repo: str


SourceReference = Union[UrlSource, StructuredSource]

# Parsed package.json content. Never mutated after fetching.
Manifest = dict[str, Any]


@dataclass(frozen=True)
class ClassificationResult:
    """Which build tool produced a site, and which version.

    Attributes:
        is_spec_up_t: True for the successor tool (spec-up-t), False for
            the original tool (spec-up).
        version: Version or version-range string, or None if undetermined.
    """

    is_spec_up_t: bool
    version: Optional[str] = None

    @property
    def tool_name(self) -> str:
        """Return the npm package name of the classified tool."""
        return "spec-up-t" if self.is_spec_up_t else "spec-up"


@dataclass
class VersionArchive:
    """Result of probing the ``versions/`` directory of a site.

    Attributes:
        exists: True if the versions directory answered the probe.
        versions: Names of the version subdirectories found, in probe order.
        error: Message of the failure that aborted the probe, if any.
    """

    exists: bool = False
    versions: list[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def count(self) -> int:
        """Return the number of version subdirectories found."""
        return len(self.versions)


@dataclass
class FetchedPage:
    """A fetched HTML document.

    Attributes:
        url: URL the document was fetched from.
        text: Response body.
        last_modified: Parsed ``Last-Modified`` header, if present.
    """

    url: str
    text: str
    last_modified: Optional[datetime] = None


@dataclass
class AnalysisResult:
    """Aggregate outcome of one analysis run.

    Every auxiliary check fills its own field, so a failure in one check
    never hides the results of the others.

    Attributes:
        url: The normalized URL that was analysed.
        source: Repository pointer extracted from the site configuration.
        repo: Repository URL used for the manifest lookup.
        pdf_exists: True if ``index.pdf`` was found.
        pdf_error: Failure of the PDF check, if any.
        classification: Build tool classification of the manifest.
        manifest_url: Raw manifest URL that was fetched successfully.
        manifest_error: Last manifest failure when no candidate succeeded.
        version_archive: Outcome of the ``versions/`` probe.
        last_modified: ``Last-Modified`` date of ``index.html``.
        error: Unexpected failure that aborted the run.
    """

    url: str
    source: Optional[SourceReference] = None
    repo: Optional[str] = None
    pdf_exists: bool = False
    pdf_error: Optional[Exception] = None
    classification: ClassificationResult = field(
        default_factory=lambda: ClassificationResult(is_spec_up_t=True)
    )
    manifest_url: Optional[str] = None
    manifest_error: Optional[Exception] = None
    version_archive: VersionArchive = field(default_factory=VersionArchive)
    last_modified: Optional[datetime] = None
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        """Return True if the run finished without an unexpected failure."""
        return self.error is None
