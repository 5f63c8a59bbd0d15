# ABOUTME: DOM section extraction under "Filming locations" headings
# ABOUTME: Walks sibling elements after each matching heading until the next heading or a step bound

from bs4 import BeautifulSoup, Tag

from location_scout.extraction.segmenter import segment

HEADING_LABEL = "filming location"
SECTION_HEADINGS = ["h2", "h3", "h4"]
ALL_HEADINGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
HEADING_WRAPPER_CLASS = "mw-heading"
LIST_TAGS = {"ul", "ol", "dl"}
MAX_SIBLING_STEPS = 200


def _is_heading_wrapper(node: Tag) -> bool:
    return HEADING_WRAPPER_CLASS in (node.get("class") or [])


def _is_section_boundary(node: Tag) -> bool:
    return node.name in ALL_HEADINGS or _is_heading_wrapper(node)


def _walk_start(heading: Tag) -> Tag:
    # Current MediaWiki skins wrap headings in <div class="mw-heading">, leaving the h2 without siblings
    parent = heading.parent
    if isinstance(parent, Tag) and _is_heading_wrapper(parent):
        return parent
    return heading


def _node_text(node: Tag) -> str:
    if node.name in LIST_TAGS:
        items = node.find_all(["li", "dd", "dt"])
        if items:
            return "\n".join(item.get_text() for item in items)
    return node.get_text()


def gather_section_text(heading: Tag, max_steps: int = MAX_SIBLING_STEPS) -> str:
    """Concatenate text of the elements following ``heading`` up to the next heading."""
    gathered: list[str] = []
    node = _walk_start(heading).find_next_sibling()
    steps = 0
    while node is not None and steps < max_steps:
        if _is_section_boundary(node):
            break
        gathered.append(_node_text(node))
        node = node.find_next_sibling()
        steps += 1
    return "\n".join(gathered)


def find_location_headings(document: BeautifulSoup) -> list[Tag]:
    return [
        heading
        for heading in document.find_all(SECTION_HEADINGS)
        if HEADING_LABEL in heading.get_text().lower()
    ]


def extract_from_headings(document: BeautifulSoup, max_steps: int = MAX_SIBLING_STEPS) -> list[str]:
    """Phrases from every section headed "Filming location(s)", in heading then sibling order."""
    phrases: list[str] = []
    for heading in find_location_headings(document):
        gathered = gather_section_text(heading, max_steps)
        if gathered.strip():
            phrases.extend(segment(gathered))
    return phrases
