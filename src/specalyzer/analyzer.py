"""Analysis orchestration for a deployed specification.

Runs the analysis stages in order, one request at a time:

1. Locate the repository: read ``window.specConfig.source`` from
   ``index.html`` unless the input already is a GitHub URL.
2. Check for ``index.pdf``.
3. Fetch package.json from the ``main`` then ``master`` branch and
   classify the build tool.
4. Probe the ``versions/`` archive.

Each auxiliary stage records its own outcome on the AnalysisResult, so a
failing check never hides the others.
"""

import logging
from typing import Optional

from specalyzer.classifier import BuildToolClassifier
from specalyzer.config import AnalyzerSettings
from specalyzer.exceptions import FetchError, UnsupportedRepositoryError
from specalyzer.extractors import extract_source_reference
from specalyzer.fetchers import ManifestFetcher, SiteFetcher, VersionArchiveProbe
from specalyzer.models import AnalysisResult, VersionArchive
from specalyzer.urls import (
    canonical_repo_url,
    is_repository_url,
    manifest_urls,
    resolve_repo_url,
)

logger = logging.getLogger(__name__)


class SpecAnalyzer:
    """Analyzes a specification site end to end.

    Attributes:
        settings: Analyzer settings.
        site_fetcher: Fetcher for the site's pages and probes.
        manifest_fetcher: Fetcher for the repository's package.json.
        classifier: Build tool classifier.
        version_probe: Version archive probe.
    """

    def __init__(
        self,
        settings: Optional[AnalyzerSettings] = None,
        site_fetcher: Optional[SiteFetcher] = None,
        manifest_fetcher: Optional[ManifestFetcher] = None,
        classifier: Optional[BuildToolClassifier] = None,
    ) -> None:
        """Initialize the analyzer with optional custom collaborators.

        Args:
            settings: Optional settings. Defaults are used if omitted.
            site_fetcher: Optional custom SiteFetcher.
            manifest_fetcher: Optional custom ManifestFetcher.
            classifier: Optional custom BuildToolClassifier.
        """
        self.settings = settings or AnalyzerSettings()
        self.site_fetcher = site_fetcher or SiteFetcher(
            probe_timeout=self.settings.probe_timeout,
            max_redirects=self.settings.max_redirects,
        )
        self.manifest_fetcher = manifest_fetcher or ManifestFetcher(
            github_token=self.settings.github_token,
        )
        self.classifier = classifier or BuildToolClassifier(
            min_typical_matches=self.settings.min_typical_matches
        )
        self.version_probe = VersionArchiveProbe(self.site_fetcher, self.settings)

    async def analyze(self, url: str) -> AnalysisResult:
        """Analyze a specification site.

        Args:
            url: Normalized site URL (see ``urls.normalize_url``).

        Returns:
            AnalysisResult. Unexpected failures are stored in ``error``
            rather than raised; partial results are kept.
        """
        result = AnalysisResult(url=url)
        logger.debug("Starting analysis of %s", url)

        try:
            await self._locate_repository(result)
            await self._check_pdf(result)
            await self._classify(result)
            await self._probe_versions(result)
        except Exception as e:
            logger.error("Analysis of %s failed: %s", url, e)
            result.error = e

        return result

    async def _locate_repository(self, result: AnalysisResult) -> None:
        url = result.url
        if is_repository_url(url):
            logger.debug("%s is already a repository URL", url)
            result.repo = canonical_repo_url(url) or url
            return

        try:
            page = await self.site_fetcher.fetch_index_html(url)
        except FetchError as e:
            logger.info("Treating %s as a repository URL directly (%s)", url, e)
            result.repo = url
            return

        result.last_modified = page.last_modified
        result.source = extract_source_reference(page.text)
        if result.source is None:
            logger.info(
                "Could not find specConfig.source in index.html, using %s", url
            )
            result.repo = url
            return

        repo = resolve_repo_url(result.source)
        if repo is None:
            logger.info("Unsupported repository source %r, using %s", result.source, url)
            repo = url
        result.repo = canonical_repo_url(repo) or repo

    async def _check_pdf(self, result: AnalysisResult) -> None:
        try:
            result.pdf_exists = await self.site_fetcher.check_index_pdf(result.url)
        except FetchError as e:
            logger.warning("PDF check failed: %s", e)
            result.pdf_exists = False
            result.pdf_error = e

    async def _classify(self, result: AnalysisResult) -> None:
        candidates = manifest_urls(
            result.repo or result.url, self.settings.manifest_branches
        )

        manifest = None
        if not candidates:
            result.manifest_error = UnsupportedRepositoryError(result.repo)
            logger.warning("%s", result.manifest_error)
        else:
            outcome = await self.manifest_fetcher.fetch_manifest(candidates)
            if outcome.succeeded:
                manifest = outcome.value
                result.manifest_url = outcome.candidate
            else:
                result.manifest_error = outcome.last_error

        result.classification = self.classifier.classify(manifest)
        logger.debug(
            "Classified as %s %s",
            result.classification.tool_name,
            result.classification.version,
        )

    async def _probe_versions(self, result: AnalysisResult) -> None:
        try:
            result.version_archive = await self.version_probe.probe(result.url)
        except Exception as e:
            logger.warning("Error checking versions: %s", e)
            result.version_archive = VersionArchive(exists=False, error=str(e))

    async def close(self) -> None:
        """Close any open resources (like HTTP sessions)."""
        await self.site_fetcher.close()
        await self.manifest_fetcher.close()

    async def __aenter__(self) -> "SpecAnalyzer":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
