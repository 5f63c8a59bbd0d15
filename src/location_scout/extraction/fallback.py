# ABOUTME: Last-resort keyword scan over paragraph, list item and table cell text
# ABOUTME: Noisy on purpose; only used when every other strategy came back empty

from bs4 import BeautifulSoup

FALLBACK_KEYWORDS = ("filming location", "filming locations", "locations used", "location", "locations")
SCANNED_TAGS = ["p", "li", "td"]


def mentions_location(text: str) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in FALLBACK_KEYWORDS)


def scan_paragraphs(document: BeautifulSoup) -> list[str]:
    """Full text of every paragraph, list item and table cell mentioning a location keyword."""
    texts = (node.get_text().strip() for node in document.find_all(SCANNED_TAGS))
    return [text for text in texts if text and mentions_location(text)]
