# ABOUTME: Collaborators that feed pages and raw wiki markup to the engine
# ABOUTME: HTTP and browser-rendering page fetchers plus single-shot Wikipedia raw markup lookup

from .browser_fetcher import BrowserPageFetcher
from .markup_source import WikipediaMarkupSource
from .page_fetcher import HttpPageFetcher, page_from_html

__all__ = [
    "BrowserPageFetcher",
    "HttpPageFetcher",
    "WikipediaMarkupSource",
    "page_from_html",
]
