# ABOUTME: HTTP page fetcher that turns a URL into a parsed PageContext
# ABOUTME: Uses httpx with tenacity retries on transport errors and BeautifulSoup for parsing

import httpx
from bs4 import BeautifulSoup
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from location_scout.config import DEFAULT_USER_AGENT
from location_scout.core.models import PageContext
from location_scout.extraction.base import ExtractionError
from location_scout.utils.logging import get_logger, log_api_call

HTML_PARSER = "html.parser"


def page_from_html(url: str, html: str | bytes, raw_markup: str | None = None) -> PageContext:
    """Build a page context from HTML that was fetched elsewhere."""
    return PageContext(url=url, document=BeautifulSoup(html, HTML_PARSER), raw_markup=raw_markup)


class HttpPageFetcher:
    """Fetches pages over HTTP. Transport errors are retried; HTTP error statuses are not."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 20.0,
        user_agent: str = DEFAULT_USER_AGENT,
        retry_attempts: int = 3,
        retry_wait: float = 1.0,
    ):
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers={"User-Agent": user_agent},
            timeout=timeout,
        )
        self.retry_attempts = retry_attempts
        self.retry_wait = retry_wait
        self.logger = get_logger(__name__)

    @log_api_call("page_fetch")
    async def fetch(self, url: str) -> PageContext:
        """Fetch ``url`` and parse it. Raises ExtractionError when the page can't be loaded."""
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.retry_attempts),
                wait=wait_exponential(multiplier=self.retry_wait, max=10.0),
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    response = await self.http_client.get(url, follow_redirects=True)
                    response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ExtractionError(f"Page returned HTTP {e.response.status_code}: {url}") from e
        except httpx.HTTPError as e:
            raise ExtractionError(f"Failed to fetch page {url}: {e}") from e

        loaded_url = str(response.url)
        self.logger.debug(
            "Fetched page",
            url=url,
            loaded_url=loaded_url,
            content_length=len(response.content),
            redirected=bool(response.history),
        )
        return page_from_html(loaded_url, response.text)

    async def close(self) -> None:
        await self.http_client.aclose()
