"""Probe for archived specification versions.

Spec-Up-T publishes frozen snapshots under ``versions/v1/``,
``versions/v2/`` and so on. Static hosts rarely allow directory listing,
so the archive is discovered by probing candidate names.
"""

import logging
from typing import Iterator

from specalyzer.config import AnalyzerSettings
from specalyzer.fetchers.site import SiteFetcher
from specalyzer.models import VersionArchive

logger = logging.getLogger(__name__)


class VersionArchiveProbe:
    """Discovers version directories below ``{base}/versions/``.

    Numbered candidates ``v1..vN`` are probed in order and probing stops
    after ``max_consecutive_misses`` missing directories in a row. The
    literal tags (``latest``, ``stable``, ...) are probed afterwards.

    Attributes:
        fetcher: Site fetcher used for the HEAD probes.
        settings: Probe bounds.
    """

    def __init__(self, fetcher: SiteFetcher, settings: AnalyzerSettings) -> None:
        self.fetcher = fetcher
        self.settings = settings

    def numbered_candidates(self) -> Iterator[str]:
        """Yield ``v1`` to ``v{max_numbered_version}``."""
        for number in range(1, self.settings.max_numbered_version + 1):
            yield f"v{number}"

    async def probe(self, base_url: str) -> VersionArchive:
        """Probe a site for its version archive.

        Args:
            base_url: Normalized site URL.

        Returns:
            VersionArchive with the directories found, in probe order.
        """
        versions_url = base_url.rstrip("/") + "/versions/"

        if not await self.fetcher.directory_exists(versions_url):
            logger.debug("No versions directory at %s", versions_url)
            return VersionArchive(exists=False)

        found: list[str] = []
        misses = 0
        for name in self.numbered_candidates():
            if await self.fetcher.directory_exists(f"{versions_url}{name}/"):
                found.append(name)
                misses = 0
                continue
            misses += 1
            if misses >= self.settings.max_consecutive_misses:
                break

        for name in self.settings.literal_version_tags:
            if await self.fetcher.directory_exists(f"{versions_url}{name}/"):
                found.append(name)

        logger.debug("Found %d version(s) at %s", len(found), versions_url)
        return VersionArchive(exists=True, versions=found)
