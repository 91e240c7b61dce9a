from typing import Optional

import aiohttp

from specalyzer import __version__
from specalyzer.fetchers.base import BaseFetcher

USER_AGENT = f"specalyzer/{__version__}"


class HttpFetcher(BaseFetcher):
    """Base class for fetchers that make HTTP requests.

    Manages a shared aiohttp.ClientSession for connection pooling and reuse.
    The session may also be injected so several fetchers share one pool.
    """

    def __init__(self, session: Optional[aiohttp.ClientSession] = None) -> None:
        """Initialize the HttpFetcher.

        Args:
            session: Optional externally owned session. It is not closed
                by ``close()``.
        """
        self._session: Optional[aiohttp.ClientSession] = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session.

        Returns:
            The shared aiohttp ClientSession.
        """
        if self._session is None or self._session.closed:
            self._session = self._create_session()
            self._owns_session = True
        return self._session

    def _create_session(self) -> aiohttp.ClientSession:
        """Create a new aiohttp.ClientSession.

        Returns:
            A new aiohttp.ClientSession sending the specalyzer User-Agent.
        """
        return aiohttp.ClientSession(headers={"User-Agent": USER_AGENT})

    async def close(self) -> None:
        """Close the aiohttp session if this fetcher created it."""
        if (
            self._owns_session
            and self._session is not None
            and not self._session.closed
        ):
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "HttpFetcher":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
