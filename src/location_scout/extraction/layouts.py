# ABOUTME: Source-specific extraction for known "locations listing" page layouts
# ABOUTME: IMDb locations pages list one location per element, so text is taken as-is

import re

from bs4 import BeautifulSoup

LISTING_URL_PATTERN = re.compile(r"imdb\.com/title/[^/]+/locations", re.IGNORECASE)
LISTING_CONTAINER_SELECTOR = "#filmingLocations"
LISTING_ITEM_SELECTOR = "li, .ipl-zebra-list__item, .soda, .filming-location"


def is_listing_url(url: str | None) -> bool:
    return bool(url) and LISTING_URL_PATTERN.search(url) is not None


def has_listing_container(document: BeautifulSoup) -> bool:
    return document.select_one(LISTING_CONTAINER_SELECTOR) is not None


def applies_to_known_layout(document: BeautifulSoup, url: str | None, found_so_far: int) -> bool:
    """The URL names a listing page, or the listing container is present and nothing was found yet."""
    return is_listing_url(url) or (found_so_far == 0 and has_listing_container(document))


def extract_from_known_layout(document: BeautifulSoup, url: str | None = None) -> list[str]:
    """Trimmed text of every listing element, in document order.

    Returns an empty list when the site has changed its markup and nothing matches.
    """
    texts = (element.get_text().strip() for element in document.select(LISTING_ITEM_SELECTOR))
    return [text for text in texts if text]
