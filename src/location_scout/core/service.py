# ABOUTME: High-level service API that drives page extraction end to end
# ABOUTME: Fetches pages and optional wiki markup, runs the engine, and writes records and audits to sinks

from __future__ import annotations

from collections.abc import Callable, Iterable

from location_scout.config import Config, get_config
from location_scout.core.models import PageAuditSnapshot, PageContext, PageExtraction
from location_scout.extraction.base import ExtractionError, MarkupSource, PageFetcher
from location_scout.extraction.orchestrator import extract_page
from location_scout.extraction.wiki import BrowserPageFetcher, HttpPageFetcher, WikipediaMarkupSource, page_from_html
from location_scout.persistence import DatabaseManager
from location_scout.utils.logging import get_logger, log_extraction_step, with_page_context

ProgressCallback = Callable[[str, int, int], None]


class LocationExtractionService:
    """Service for extracting filming locations from pages and persisting the results."""

    def __init__(
        self,
        page_fetcher: PageFetcher | None = None,
        markup_source: MarkupSource | None = None,
        database: DatabaseManager | None = None,
        config: Config | None = None,
    ):
        self.config = config or get_config()
        self.page_fetcher = page_fetcher or self._default_page_fetcher()
        self.markup_source = markup_source or WikipediaMarkupSource(
            timeout=self.config.request_timeout, user_agent=self.config.user_agent
        )
        self.database = database
        if self.database is None and self.config.save_results:
            self.database = DatabaseManager(self.config.database_url)
        self._tables_ready = False
        self.logger = get_logger(__name__)

    def _default_page_fetcher(self) -> PageFetcher:
        if self.config.use_browser:
            return BrowserPageFetcher(timeout=self.config.request_timeout, user_agent=self.config.user_agent)
        return HttpPageFetcher(timeout=self.config.request_timeout, user_agent=self.config.user_agent)

    @log_extraction_step("extract_url")
    async def extract_url(self, url: str) -> PageExtraction:
        """Fetch ``url``, extract its filming locations and store the results.

        Raises:
            ExtractionError: If the page itself cannot be fetched
        """
        page = await self.page_fetcher.fetch(url)
        return await self._process(page)

    @log_extraction_step("extract_html")
    async def extract_html(self, url: str, html: str | bytes) -> PageExtraction:
        """Extract from HTML that was obtained elsewhere, treating it as the page at ``url``."""
        return await self._process(page_from_html(url, html))

    async def extract_many(
        self, urls: Iterable[str], progress_callback: ProgressCallback | None = None
    ) -> list[PageExtraction]:
        """Extract a batch of pages one after another, skipping pages that fail to load or store."""
        urls = list(urls)
        total = len(urls)
        results: list[PageExtraction] = []

        self.logger.info("Starting batch extraction", page_count=total)

        for index, url in enumerate(urls, start=1):
            if progress_callback:
                progress_callback(url, index, total)
            try:
                results.append(await self.extract_url(url))
            except ExtractionError as exc:
                self.logger.error(
                    "Failed to extract page in batch",
                    url=url,
                    error=str(exc),
                    current_index=index,
                    total=total,
                )
            except Exception as exc:
                # Sink failures lose this page only
                self.logger.error(
                    "Failed to process page in batch",
                    url=url,
                    error=str(exc),
                    error_type=type(exc).__name__,
                    current_index=index,
                    total=total,
                )

        self.logger.info(
            "Batch extraction completed",
            total=total,
            successful=len(results),
            failed=total - len(results),
            record_count=sum(len(result.records) for result in results),
        )
        return results

    async def _process(self, page: PageContext) -> PageExtraction:
        with with_page_context(page.url) as log:
            raw_markup = await self._fetch_markup(page.url)
            if raw_markup is not None:
                page = page.model_copy(update={"raw_markup": raw_markup})
            elif self.config.use_wiki_markup and self.markup_source.supports(page.url):
                log.warning("Continuing without raw markup")

            extraction = extract_page(page, settings=self.config.extraction_settings())
            log.debug("Page extracted", record_count=len(extraction.records), has_markup=raw_markup is not None)
            await self._store(extraction)
            return extraction

    async def _fetch_markup(self, url: str) -> str | None:
        if not self.config.use_wiki_markup or not self.markup_source.supports(url):
            return None
        return await self.markup_source.fetch(url)

    async def _store(self, extraction: PageExtraction) -> None:
        if self.database is None:
            return
        if not self._tables_ready:
            await self.database.create_tables()
            self._tables_ready = True

        await self.database.append_records(extraction.records)

        try:
            await self.database.put_audit(extraction.audit)
        except Exception as exc:
            # The audit is for human review only; records are already written
            self.logger.warning(
                "Failed to save page audit snapshot",
                url=extraction.audit.url,
                error=str(exc),
                error_type=type(exc).__name__,
            )

    async def get_audit(self, url: str) -> PageAuditSnapshot | None:
        """Return the stored audit snapshot for ``url``, if any."""
        if self.database is None:
            return None
        await self.database.create_tables()
        return await self.database.get_audit(url)

    async def close(self) -> None:
        """Release HTTP clients and database resources."""
        await self.page_fetcher.close()
        await self.markup_source.close()
        if self.database is not None:
            await self.database.close()
