"""Base interface for fetchers.

Fetchers are responsible for all network I/O of an analysis run: the
specification page, its auxiliary files and the repository manifest.
"""

from abc import ABC, abstractmethod


class BaseFetcher(ABC):
    """Abstract base class for fetchers.

    Fetchers talk to remote servers and translate their answers into
    models or ``FetchError``. They are async-compatible and own any
    resources they open.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the fetcher name for logging/debugging.

        Returns:
            Name like "Site", "Manifest", etc.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release network resources held by the fetcher."""
        ...
