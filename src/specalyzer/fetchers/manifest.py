"""Fetcher for repository package.json manifests.

Reads raw package.json files from raw.githubusercontent.com, trying each
candidate branch in order until one parses.
"""

import json
import logging
from typing import Optional, Sequence

import aiohttp

from specalyzer.exceptions import ManifestError
from specalyzer.fetchers.http import HttpFetcher
from specalyzer.fetchers.waterfall import CandidateOutcome, first_success
from specalyzer.models import Manifest

logger = logging.getLogger(__name__)

ACCEPTED_CONTENT_TYPES = ("application/json", "text/plain")


class ManifestFetcher(HttpFetcher):
    """Fetcher for package.json files.

    Supports authentication via GitHub token so manifests of private
    repositories can be read.

    Attributes:
        github_token: Optional GitHub personal access token.
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        github_token: Optional[str] = None,
    ) -> None:
        """Initialize the manifest fetcher.

        Args:
            session: Optional shared aiohttp session.
            github_token: Optional GitHub token sent as a Bearer header.
        """
        super().__init__(session)
        self.github_token = github_token

    @property
    def name(self) -> str:
        """Return the fetcher name.

        Returns:
            "Manifest"
        """
        return "Manifest"

    async def fetch_json(self, url: str) -> Manifest:
        """Fetch and parse one package.json.

        Args:
            url: Raw package.json URL.

        Returns:
            The parsed manifest object.

        Raises:
            ManifestError: On transport failure, HTTP error status,
                unexpected content type, a body that is not UTF-8, an empty
                body or malformed JSON.
        """
        headers = {}
        if self.github_token:
            headers["Authorization"] = f"Bearer {self.github_token}"

        session = await self._get_session()
        logger.debug("Fetching manifest from %s", url)

        try:
            async with session.get(url, headers=headers) as response:
                if response.status >= 400:
                    raise ManifestError(
                        url, f"HTTP Error: {response.status}", status=response.status
                    )

                content_type = response.headers.get("Content-Type")
                if content_type and not any(
                    accepted in content_type for accepted in ACCEPTED_CONTENT_TYPES
                ):
                    raise ManifestError(url, f"Invalid content type: {content_type}")

                raw = await response.read()
        except aiohttp.ClientError as e:
            raise ManifestError(url, f"Error fetching {url}: {e}") from e

        try:
            body = raw.decode("utf-8-sig").strip()
        except UnicodeDecodeError as e:
            raise ManifestError(url, f"Undecodable response: {e}") from e

        if not body:
            raise ManifestError(url, "Empty response received")

        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise ManifestError(url, f"JSON parsing error: {e}") from e

        if not isinstance(data, dict):
            raise ManifestError(url, "package.json is not a JSON object")
        return data

    async def fetch_manifest(
        self, candidates: Sequence[str]
    ) -> CandidateOutcome[str, Manifest]:
        """Fetch the first candidate manifest that succeeds.

        Failed candidates are not reported unless every candidate fails,
        in which case only the last error is kept.

        Args:
            candidates: Raw package.json URLs in preference order.

        Returns:
            Outcome with the manifest and the URL it came from, or the last
            error.
        """
        outcome = await first_success(candidates, self.fetch_json, (ManifestError,))
        if outcome.succeeded:
            logger.debug("Manifest found at %s", outcome.candidate)
        else:
            logger.info(
                "No manifest found after %d candidate(s): %s",
                outcome.attempts,
                outcome.last_error,
            )
        return outcome
