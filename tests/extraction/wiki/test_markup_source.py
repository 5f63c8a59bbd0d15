# ABOUTME: Tests for the Wikipedia raw markup source
# ABOUTME: URL recognition, action=raw URL building and degrading to None on HTTP failures

import httpx
import pytest

from location_scout.extraction.wiki import WikipediaMarkupSource

ARTICLE_URL = "https://en.wikipedia.org/wiki/Inception"
RAW_URL = "https://en.wikipedia.org/w/index.php?title=Inception&action=raw"


class TestUrlHandling:
    """Static URL logic - no HTTP calls"""

    @pytest.mark.parametrize(
        "url,expected",
        [
            (ARTICLE_URL, RAW_URL),
            (
                "https://en.wikipedia.org/wiki/Example_(2010_film)",
                "https://en.wikipedia.org/w/index.php?title=Example_%282010_film%29&action=raw",
            ),
            (
                "https://fr.wikipedia.org/wiki/Am%C3%A9lie",
                "https://fr.wikipedia.org/w/index.php?title=Am%C3%A9lie&action=raw",
            ),
            (
                "https://en.m.wikipedia.org/wiki/AC/DC",
                "https://en.m.wikipedia.org/w/index.php?title=AC%2FDC&action=raw",
            ),
        ],
    )
    def test_raw_url(self, url, expected):
        assert WikipediaMarkupSource.raw_url(url) == expected

    @pytest.mark.parametrize(
        "url,supported",
        [
            (ARTICLE_URL, True),
            ("https://en.m.wikipedia.org/wiki/Heat_(1995_film)", True),
            ("https://en.wikipedia.org/w/index.php?title=Inception", False),
            ("https://en.wikipedia.org/wiki/", False),
            ("https://www.imdb.com/title/tt1375666/locations", False),
            ("https://wikipedia.org.example.com/wiki/Inception", False),
            ("not a url", False),
            ("", False),
        ],
    )
    def test_supports(self, url, supported):
        assert WikipediaMarkupSource().supports(url) is supported

    def test_default_client_user_agent(self):
        source = WikipediaMarkupSource(user_agent="test-agent/1.0")
        assert source.http_client.headers["User-Agent"] == "test-agent/1.0"

    def test_custom_client(self):
        custom_client = httpx.AsyncClient()
        assert WikipediaMarkupSource(client=custom_client).http_client is custom_client


class TestFetch:
    """HTTP behaviour of raw markup lookups"""

    @pytest.mark.asyncio
    async def test_returns_raw_markup(self, httpx_mock):
        httpx_mock.add_response(url=RAW_URL, text="== Filming locations ==\n* Paris, France\n")

        source = WikipediaMarkupSource()
        try:
            assert await source.fetch(ARTICLE_URL) == "== Filming locations ==\n* Paris, France\n"
        finally:
            await source.close()

    @pytest.mark.asyncio
    async def test_http_error_status_gives_none(self, httpx_mock):
        httpx_mock.add_response(url=RAW_URL, status_code=404)

        source = WikipediaMarkupSource()
        try:
            assert await source.fetch(ARTICLE_URL) is None
        finally:
            await source.close()

    @pytest.mark.asyncio
    async def test_transport_error_gives_none(self, httpx_mock):
        httpx_mock.add_exception(httpx.ConnectError("connection refused"), url=RAW_URL)

        source = WikipediaMarkupSource()
        try:
            assert await source.fetch(ARTICLE_URL) is None
        finally:
            await source.close()

    @pytest.mark.asyncio
    async def test_unsupported_url_makes_no_request(self, httpx_mock):
        source = WikipediaMarkupSource()
        try:
            assert await source.fetch("https://example.com/movie") is None
        finally:
            await source.close()
        assert httpx_mock.get_requests() == []
