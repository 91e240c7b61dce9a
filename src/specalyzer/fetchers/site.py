"""Fetcher for the deployed specification site.

Retrieves ``index.html`` and performs the lightweight existence probes
used by the auxiliary checks (``index.pdf`` and version directories).
"""

import asyncio
import logging
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Optional
from urllib.parse import urljoin

import aiohttp

from specalyzer.exceptions import FetchError
from specalyzer.fetchers.http import HttpFetcher
from specalyzer.models import FetchedPage

logger = logging.getLogger(__name__)


def _parse_last_modified(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError):
        logger.debug("Ignoring unparseable Last-Modified header: %s", value)
        return None


class SiteFetcher(HttpFetcher):
    """Fetcher for pages and files of a specification site.

    Attributes:
        probe_timeout: Seconds before a PDF or directory probe gives up.
        max_redirects: Redirect hops followed by the PDF check.
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        probe_timeout: float = 10.0,
        max_redirects: int = 5,
    ) -> None:
        """Initialize the site fetcher.

        Args:
            session: Optional shared aiohttp session.
            probe_timeout: Timeout in seconds for existence probes.
            max_redirects: Redirect hops followed by the PDF check.
        """
        super().__init__(session)
        self.probe_timeout = probe_timeout
        self.max_redirects = max_redirects

    @property
    def name(self) -> str:
        """Return the fetcher name.

        Returns:
            "Site"
        """
        return "Site"

    async def fetch_index_html(self, base_url: str) -> FetchedPage:
        """Fetch ``{base_url}/index.html``.

        Args:
            base_url: Normalized site URL without trailing slash.

        Returns:
            The fetched page with its Last-Modified date.

        Raises:
            FetchError: On transport failure or an HTTP error status.
        """
        url = f"{base_url}/index.html"
        logger.debug("Fetching %s", url)

        session = await self._get_session()
        try:
            async with session.get(url) as response:
                if response.status >= 400:
                    raise FetchError(
                        url, f"HTTP Error: {response.status}", status=response.status
                    )
                # Bytes that do not match the declared charset are replaced.
                text = await response.text(errors="replace")
                last_modified = _parse_last_modified(
                    response.headers.get("Last-Modified")
                )
        except aiohttp.ClientError as e:
            raise FetchError(url, f"Error fetching {url}: {e}") from e

        return FetchedPage(url=url, text=text, last_modified=last_modified)

    async def check_index_pdf(self, base_url: str) -> bool:
        """Check whether ``{base_url}/index.pdf`` exists.

        Args:
            base_url: Site URL.

        Returns:
            True on 200, False on 404.

        Raises:
            FetchError: On any other status, a timeout, a transport failure
                or too many redirects.
        """
        url = base_url.rstrip("/") + "/index.pdf"
        return await self._check_exists(url, self.max_redirects)

    async def _check_exists(self, url: str, redirects_left: int) -> bool:
        logger.debug("Checking for PDF at: %s", url)
        session = await self._get_session()
        timeout = aiohttp.ClientTimeout(total=self.probe_timeout)

        try:
            async with session.head(
                url, allow_redirects=False, timeout=timeout
            ) as response:
                status = response.status
                location = response.headers.get("Location")
                reason = response.reason or "Unknown"
        except asyncio.TimeoutError as e:
            raise FetchError(url, "Timeout when checking for PDF") from e
        except aiohttp.ClientError as e:
            raise FetchError(url, f"Error checking for PDF: {e}") from e

        if status == 200:
            return True
        if status == 404:
            return False
        if 300 <= status < 400 and location:
            if redirects_left <= 0:
                raise FetchError(url, "Too many redirects when checking for PDF", status)
            redirect_url = urljoin(url, location)
            logger.info("Following redirect to: %s", redirect_url)
            return await self._check_exists(redirect_url, redirects_left - 1)

        raise FetchError(url, f"Unexpected status code: {status} ({reason})", status)

    async def directory_exists(self, url: str) -> bool:
        """Check whether a directory URL answers a HEAD request.

        Any 2xx or 3xx status counts as present. Failures count as absent.

        Args:
            url: Directory URL, normally ending in ``/``.

        Returns:
            True if the directory appears to exist.
        """
        session = await self._get_session()
        timeout = aiohttp.ClientTimeout(total=self.probe_timeout)
        try:
            async with session.head(
                url, allow_redirects=False, timeout=timeout
            ) as response:
                return 200 <= response.status < 400
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug("Directory probe failed for %s: %s", url, e)
            return False
