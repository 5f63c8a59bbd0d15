# ABOUTME: Raw wikitext lookup for Wikipedia article URLs
# ABOUTME: One request per page via action=raw; any failure degrades to "no markup"

import re
from urllib.parse import quote, unquote, urlparse

import httpx

from location_scout.config import DEFAULT_USER_AGENT
from location_scout.utils.logging import get_logger

ARTICLE_PATH = re.compile(r"^/wiki/(.+)$")


class WikipediaMarkupSource:
    """Fetches the raw markup of Wikipedia articles. Single attempt, no retries."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 20.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers={"User-Agent": user_agent},
            timeout=timeout,
        )
        self.logger = get_logger(__name__)

    @staticmethod
    def _article_title(url: str | None) -> str | None:
        """Extract the article title from a Wikipedia URL, or None for anything else."""
        if not url:
            return None
        try:
            parsed = urlparse(url)
        except ValueError:
            return None
        if not parsed.hostname or not parsed.hostname.endswith("wikipedia.org"):
            return None
        match = ARTICLE_PATH.match(parsed.path)
        return unquote(match.group(1)) if match else None

    @staticmethod
    def raw_url(url: str) -> str | None:
        """The action=raw URL for a Wikipedia article URL."""
        title = WikipediaMarkupSource._article_title(url)
        if not title:
            return None
        host = urlparse(url).hostname
        return f"https://{host}/w/index.php?title={quote(title, safe='')}&action=raw"

    def supports(self, url: str) -> bool:
        return self._article_title(url) is not None

    async def fetch(self, url: str) -> str | None:
        """Return the article's raw markup, or None if it can't be had."""
        raw_url = self.raw_url(url)
        if raw_url is None:
            return None

        try:
            return await self._request_markup(raw_url)
        except httpx.HTTPError as e:
            self.logger.debug(
                "Raw markup request failed",
                url=url,
                raw_url=raw_url,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

    async def _request_markup(self, raw_url: str) -> str:
        self.logger.debug("Requesting raw markup", raw_url=raw_url)
        response = await self.http_client.get(raw_url, follow_redirects=True)
        response.raise_for_status()
        return response.text

    async def close(self) -> None:
        await self.http_client.aclose()
