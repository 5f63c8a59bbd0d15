# ABOUTME: Protocol interfaces for the collaborators that feed the extraction engine
# ABOUTME: Page fetchers produce parsed pages; markup sources supply raw wiki markup keyed by URL

from typing import Protocol

from location_scout.core.models import PageContext


class PageFetcher(Protocol):
    """Protocol for turning a URL into a parsed page."""

    async def fetch(self, url: str) -> PageContext:
        """Fetch and parse the page at ``url``.

        Args:
            url: Page URL

        Returns:
            Page context with the parsed document and the final (loaded) URL

        Raises:
            ExtractionError: If the page cannot be fetched
        """
        ...

    async def close(self) -> None: ...


class MarkupSource(Protocol):
    """Protocol for an auxiliary source of raw article markup."""

    def supports(self, url: str) -> bool:
        """Whether this source knows how to look up markup for ``url``."""
        ...

    async def fetch(self, url: str) -> str | None:
        """Return raw markup for ``url``, or None when it is unavailable. Never raises."""
        ...

    async def close(self) -> None: ...


class ExtractionError(Exception):
    """Raised when a page cannot be fetched or parsed at all."""

    pass
