# ABOUTME: Tests for the browser-rendering page fetcher with the crawl4ai crawler mocked out
# ABOUTME: Rendered HTML parsing, redirect handling, retries and failure mapping to ExtractionError

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from location_scout.extraction.base import ExtractionError
from location_scout.extraction.orchestrator import extract_page
from location_scout.extraction.wiki import BrowserPageFetcher

PAGE_URL = "https://www.imdb.com/title/tt1375666/locations"
CRAWLER_PATH = "location_scout.extraction.wiki.browser_fetcher.AsyncWebCrawler"

RENDERED_HTML = """
<html><head><title>Inception (2010) - Filming &amp; production - IMDb</title></head>
<body>
<ul class="ipc-metadata-list">
  <li class="ipc-metadata-list__item">Paris, France</li>
  <li class="ipc-metadata-list__item">Tangier, Morocco</li>
</ul>
</body></html>
"""


def crawl_result(html=RENDERED_HTML, success=True, error_message=None, redirected_url=None):
    result = MagicMock()
    result.success = success
    result.html = html
    result.error_message = error_message
    result.url = PAGE_URL
    result.redirected_url = redirected_url
    return result


@pytest.fixture
def fetcher():
    return BrowserPageFetcher(timeout=5.0, retry_attempts=2, retry_wait=0)


class TestBrowserPageFetcher:
    def test_run_config(self, fetcher):
        assert fetcher.run_config.page_timeout == 5000
        assert fetcher.run_config.wait_until == "networkidle"
        assert fetcher.browser_config.headless is True

    @pytest.mark.asyncio
    async def test_fetch_parses_rendered_html(self, fetcher):
        with patch(CRAWLER_PATH) as mock_crawler_class:
            mock_crawler = AsyncMock()
            mock_crawler.arun.return_value = crawl_result()
            mock_crawler_class.return_value.__aenter__.return_value = mock_crawler

            page = await fetcher.fetch(PAGE_URL)

            mock_crawler.arun.assert_called_once_with(url=PAGE_URL, config=fetcher.run_config)
            mock_crawler_class.assert_called_once_with(config=fetcher.browser_config)

        assert page.url == PAGE_URL
        assert page.raw_markup is None
        assert page.document.title.get_text().startswith("Inception (2010)")

    @pytest.mark.asyncio
    async def test_rendered_page_runs_through_the_engine(self, fetcher):
        with patch(CRAWLER_PATH) as mock_crawler_class:
            mock_crawler = AsyncMock()
            mock_crawler.arun.return_value = crawl_result()
            mock_crawler_class.return_value.__aenter__.return_value = mock_crawler

            page = await fetcher.fetch(PAGE_URL)

        extraction = extract_page(page)
        assert [record.country for record in extraction.records] == ["France", "Morocco"]

    @pytest.mark.asyncio
    async def test_redirect_becomes_page_url(self, fetcher):
        final_url = "https://m.imdb.com/title/tt1375666/locations/"
        with patch(CRAWLER_PATH) as mock_crawler_class:
            mock_crawler = AsyncMock()
            mock_crawler.arun.return_value = crawl_result(redirected_url=final_url)
            mock_crawler_class.return_value.__aenter__.return_value = mock_crawler

            page = await fetcher.fetch(PAGE_URL)

        assert page.url == final_url

    @pytest.mark.asyncio
    async def test_failed_render_is_retried(self, fetcher):
        with patch(CRAWLER_PATH) as mock_crawler_class:
            mock_crawler = AsyncMock()
            mock_crawler.arun.side_effect = [
                crawl_result(success=False, error_message="net::ERR_TIMED_OUT"),
                crawl_result(),
            ]
            mock_crawler_class.return_value.__aenter__.return_value = mock_crawler

            page = await fetcher.fetch(PAGE_URL)

            assert mock_crawler.arun.call_count == 2

        assert page.url == PAGE_URL

    @pytest.mark.asyncio
    async def test_persistent_failure_raises_extraction_error(self, fetcher):
        with patch(CRAWLER_PATH) as mock_crawler_class:
            mock_crawler = AsyncMock()
            mock_crawler.arun.return_value = crawl_result(success=False, error_message="net::ERR_NAME_NOT_RESOLVED")
            mock_crawler_class.return_value.__aenter__.return_value = mock_crawler

            with pytest.raises(ExtractionError, match="ERR_NAME_NOT_RESOLVED"):
                await fetcher.fetch(PAGE_URL)

            assert mock_crawler.arun.call_count == 2

    @pytest.mark.asyncio
    async def test_browser_crash_raises_extraction_error(self, fetcher):
        with patch(CRAWLER_PATH) as mock_crawler_class:
            mock_crawler_class.return_value.__aenter__.side_effect = RuntimeError("Executable doesn't exist")

            with pytest.raises(ExtractionError, match="Executable doesn't exist"):
                await fetcher.fetch(PAGE_URL)

    @pytest.mark.asyncio
    async def test_empty_render_raises_extraction_error(self, fetcher):
        with patch(CRAWLER_PATH) as mock_crawler_class:
            mock_crawler = AsyncMock()
            mock_crawler.arun.return_value = crawl_result(html="")
            mock_crawler_class.return_value.__aenter__.return_value = mock_crawler

            with pytest.raises(ExtractionError, match="empty"):
                await fetcher.fetch(PAGE_URL)
