# ABOUTME: Browser-rendering page fetcher built on crawl4ai for pages assembled by JavaScript
# ABOUTME: Renders the page in headless Chromium and hands the rendered HTML to the same parser as the HTTP fetcher

from crawl4ai import AsyncWebCrawler, BrowserConfig, CacheMode, CrawlerRunConfig
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from location_scout.config import DEFAULT_USER_AGENT
from location_scout.core.models import PageContext
from location_scout.extraction.base import ExtractionError
from location_scout.extraction.wiki.page_fetcher import page_from_html
from location_scout.utils.logging import get_logger, log_api_call, suppress_library_output


class BrowserPageFetcher:
    """Fetches pages by rendering them in a headless browser.

    Film database listing pages are increasingly built client side, so their
    plain HTML has no locations in it. Each fetch opens a crawler, waits for the
    network to go quiet and parses the rendered DOM.
    """

    def __init__(
        self,
        timeout: float = 20.0,
        user_agent: str = DEFAULT_USER_AGENT,
        headless: bool = True,
        retry_attempts: int = 2,
        retry_wait: float = 1.0,
    ):
        self.browser_config = BrowserConfig(headless=headless, user_agent=user_agent, verbose=False)
        self.run_config = CrawlerRunConfig(
            cache_mode=CacheMode.BYPASS,
            wait_until="networkidle",
            page_timeout=int(timeout * 1000),
            verbose=False,
        )
        self.retry_attempts = retry_attempts
        self.retry_wait = retry_wait
        self.logger = get_logger(__name__)

    @log_api_call("browser_render")
    async def fetch(self, url: str) -> PageContext:
        """Render ``url`` and parse the result. Raises ExtractionError when rendering fails."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=self.retry_wait, max=10.0),
            retry=retry_if_exception_type(ExtractionError),
            reraise=True,
        ):
            with attempt:
                html, loaded_url = await self._render(url)

        self.logger.debug("Rendered page", url=url, loaded_url=loaded_url, content_length=len(html))
        return page_from_html(loaded_url, html)

    async def _render(self, url: str) -> tuple[str, str]:
        try:
            with suppress_library_output():
                async with AsyncWebCrawler(config=self.browser_config) as crawler:
                    result = await crawler.arun(url=url, config=self.run_config)
        except Exception as e:
            self.logger.error("Browser crashed while rendering", url=url, error=str(e), error_type=type(e).__name__)
            raise ExtractionError(f"Failed to render page {url}: {e}") from e

        if not result or not result.success:
            message = result.error_message if result else "no result returned"
            self.logger.warning("Rendering failed", url=url, error_message=message)
            raise ExtractionError(f"Failed to render page {url}: {message}")
        if not result.html:
            raise ExtractionError(f"Rendered page is empty: {url}")

        return result.html, result.redirected_url or result.url or url

    async def close(self) -> None:
        """Nothing to release; each fetch owns its browser."""
