# ABOUTME: Cleaning, deduplication and field splitting of candidate location phrases
# ABOUTME: Merges strategies by priority; first occurrence of a phrase wins

import re
from collections.abc import Iterable

from location_scout.core.models import CandidatePhrase, CandidateSource, NormalizedLocation
from location_scout.extraction.coordinates import parse_coordinates

WHITESPACE_RUN = re.compile(r"\s+")
MIN_PHRASE_LENGTH = 3
MAX_RECORDS = 200


def collapse_whitespace(text: str) -> str:
    return WHITESPACE_RUN.sub(" ", text).strip()


def order_by_priority(candidates: Iterable[CandidatePhrase]) -> list[CandidatePhrase]:
    """Stable sort: markup phrases first, fallback last, in-group order untouched."""
    return sorted(candidates, key=lambda candidate: candidate.source.priority)


def dedupe_candidates(candidates: Iterable[CandidatePhrase]) -> list[CandidatePhrase]:
    """Whitespace-collapsed, deduplicated candidates in priority order.

    Phrases shorter than three characters after collapsing are dropped. Two
    phrases are duplicates when they match ignoring case; the first one seen
    is kept whichever strategy produced the later one.
    """
    seen: set[str] = set()
    kept: list[CandidatePhrase] = []
    for candidate in order_by_priority(candidates):
        text = collapse_whitespace(candidate.text)
        if len(text) < MIN_PHRASE_LENGTH:
            continue
        key = text.casefold()
        if key in seen:
            continue
        seen.add(key)
        kept.append(CandidatePhrase(text=text, source=candidate.source))
    return kept


def dedupe_phrases(candidates: Iterable[CandidatePhrase]) -> list[str]:
    return [candidate.text for candidate in dedupe_candidates(candidates)]


def split_fields(phrase: str) -> tuple[str, str, str]:
    """Guess (city, region, country) from the comma-separated parts of ``phrase``.

    One part is a city, two are city and country, three or more put the second
    part in region and the rest in country. This is not a gazetteer lookup and
    happily misfiles phrases that aren't shaped like "city, region, country".
    """
    parts = [part.strip() for part in phrase.split(",")]
    parts = [part for part in parts if part]

    city = parts[0] if parts else ""
    region = ""
    country = ""
    if len(parts) == 2:
        country = parts[1]
    elif len(parts) >= 3:
        region = parts[1]
        country = ", ".join(parts[2:])
    return city, region, country


def normalize(
    candidates: Iterable[CandidatePhrase],
    validate_coordinates: bool = False,
    max_records: int = MAX_RECORDS,
) -> list[NormalizedLocation]:
    """Turn raw candidates into at most ``max_records`` structured locations."""
    locations: list[NormalizedLocation] = []
    for candidate in dedupe_candidates(candidates)[:max_records]:
        city, region, country = split_fields(candidate.text)
        locations.append(
            NormalizedLocation(
                location_text=candidate.text,
                city=city,
                region=region,
                country=country,
                coordinates=parse_coordinates(candidate.text, validate=validate_coordinates),
                source=candidate.source,
            )
        )
    return locations


def candidates_from(source: CandidateSource, phrases: Iterable[str]) -> list[CandidatePhrase]:
    return [CandidatePhrase(text=phrase, source=source) for phrase in phrases]
