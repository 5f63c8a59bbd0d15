# ABOUTME: Filming locations section extraction from raw wiki markup
# ABOUTME: Isolates the section by heading and strips markup through a fixed pipeline of rewrite passes

"""
Wiki markup is the most reliable source we have: the "Filming locations" section
is delimited by the markup's own ``== heading ==`` syntax, so there is no layout
guessing involved. Each cleanup pass below is an independent text rewrite so it
can be tested and reordered on its own.
"""

import re
from collections.abc import Callable

HEADING_LINE = re.compile(r"^(=+)[ \t]*([^=\s].*?)[ \t]*\1[ \t]*$", re.MULTILINE)
SECTION_TITLE = re.compile(r"filming\s+locations", re.IGNORECASE)

COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)
REF_PATTERN = re.compile(r"<ref\b[^>]*/>|<ref\b[^>]*(?<!/)>.*?</ref>", re.DOTALL | re.IGNORECASE)
EMPHASIS_PATTERN = re.compile(r"'{2,}")
INNER_TEMPLATE_PATTERN = re.compile(r"\{\{[^{}]*\}\}")
EXTERNAL_LINK_PATTERN = re.compile(r"\[https?://[^\]]*\]")
INTERNAL_LINK_PATTERN = re.compile(r"\[\[([^\]|]+)(?:\|([^\]]*))?\]\]")
LIST_MARKER_PATTERN = re.compile(r"^[*#:;]+[ \t]*", re.MULTILINE)

# Exclusive bounds on cleaned line length
MIN_LINE_LENGTH = 5
MAX_LINE_LENGTH = 400
MAX_LINES = 200


def find_filming_section(markup: str | None) -> str | None:
    """Return the body of the "Filming locations" section, without its heading."""
    if not markup:
        return None

    headings = list(HEADING_LINE.finditer(markup))
    for index, heading in enumerate(headings):
        if not SECTION_TITLE.search(heading.group(2)):
            continue
        end = headings[index + 1].start() if index + 1 < len(headings) else len(markup)
        return markup[heading.end() : end]

    return None


def strip_comments(text: str) -> str:
    return COMMENT_PATTERN.sub("", text)


def strip_references(text: str) -> str:
    return REF_PATTERN.sub("", text)


def strip_emphasis(text: str) -> str:
    """Remove ''italic'', '''bold''' and '''''both''''' markers."""
    return EMPHASIS_PATTERN.sub("", text)


def strip_templates(text: str) -> str:
    """Remove {{...}} invocations, innermost first so nested templates go too."""
    previous = None
    while previous != text:
        previous = text
        text = INNER_TEMPLATE_PATTERN.sub("", text)
    return text


def strip_external_links(text: str) -> str:
    return EXTERNAL_LINK_PATTERN.sub("", text)


def rewrite_internal_links(text: str) -> str:
    """Replace [[target|display]] with display, or target when there is no display text."""
    return INTERNAL_LINK_PATTERN.sub(lambda m: m.group(2) or m.group(1), text)


def strip_list_markers(text: str) -> str:
    return LIST_MARKER_PATTERN.sub("", text)


CLEANUP_PASSES: tuple[Callable[[str], str], ...] = (
    strip_comments,
    strip_references,
    strip_emphasis,
    strip_templates,
    strip_external_links,
    rewrite_internal_links,
    strip_list_markers,
)


def clean_markup(text: str) -> str:
    """Run every cleanup pass over ``text`` in order."""
    for cleanup in CLEANUP_PASSES:
        text = cleanup(text)
    return text


def extract_from_markup(
    raw_markup: str | None,
    min_length: int = MIN_LINE_LENGTH,
    max_length: int = MAX_LINE_LENGTH,
    max_lines: int = MAX_LINES,
) -> list[str]:
    """Candidate lines from the "Filming locations" section of wiki markup.

    Args:
        raw_markup: Raw article markup, or None when unavailable
        min_length: Lines must be longer than this
        max_length: Lines must be shorter than this
        max_lines: Maximum number of lines returned

    Returns:
        Cleaned lines in section order, empty when there is no such section
    """
    section = find_filming_section(raw_markup)
    if section is None:
        return []

    lines = (line.strip() for line in clean_markup(section).split("\n"))
    hits = [line for line in lines if min_length < len(line) < max_length]
    return hits[:max_lines]
