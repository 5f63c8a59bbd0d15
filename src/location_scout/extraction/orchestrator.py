# ABOUTME: Per-page orchestration of the location extraction strategies
# ABOUTME: Runs DOM strategies in priority order, prepends markup results, normalizes and stamps records

import re
from collections.abc import Callable
from dataclasses import dataclass

from location_scout.config import ExtractionSettings
from location_scout.core.models import (
    CandidatePhrase,
    CandidateSource,
    LocationRecord,
    MovieMeta,
    PageAuditSnapshot,
    PageContext,
    PageExtraction,
    utcnow,
)
from location_scout.extraction.fallback import scan_paragraphs
from location_scout.extraction.headings import extract_from_headings
from location_scout.extraction.layouts import applies_to_known_layout, extract_from_known_layout
from location_scout.extraction.markup import extract_from_markup
from location_scout.extraction.normalizer import candidates_from, dedupe_phrases, normalize
from location_scout.utils.logging import get_logger, with_operation_context

YEAR_PATTERN = re.compile(r"\b(?:19|20)\d{2}\b")

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ExtractionStep:
    """One DOM strategy: when it applies given what was found so far, and how it extracts."""

    source: CandidateSource
    applies: Callable[[PageContext, int], bool]
    extract: Callable[[PageContext], list[str]]


def dom_steps(settings: ExtractionSettings) -> list[ExtractionStep]:
    """DOM strategies in the order they are tried."""
    return [
        ExtractionStep(
            source=CandidateSource.HEADING,
            applies=lambda page, found: True,
            extract=lambda page: extract_from_headings(page.document, max_steps=settings.max_sibling_steps),
        ),
        ExtractionStep(
            source=CandidateSource.LAYOUT,
            applies=lambda page, found: applies_to_known_layout(page.document, page.url, found),
            extract=lambda page: extract_from_known_layout(page.document, page.url),
        ),
        ExtractionStep(
            source=CandidateSource.FALLBACK,
            applies=lambda page, found: found == 0,
            extract=lambda page: scan_paragraphs(page.document),
        ),
    ]


def derive_movie_meta(page: PageContext) -> MovieMeta:
    """Title from the first page heading or og:title, year from a 19xx/20xx in the title."""
    title = ""
    heading = page.document.select_one("h1, #firstHeading")
    if heading is not None:
        title = heading.get_text().strip()
    if not title:
        meta = page.document.select_one('meta[property="og:title"]')
        content = meta.get("content") if meta is not None else None
        title = content.strip() if isinstance(content, str) else ""

    match = YEAR_PATTERN.search(title)
    return MovieMeta(title=title, year=match.group(0) if match else "")


def collect_candidates(page: PageContext, settings: ExtractionSettings) -> list[CandidatePhrase]:
    """Run every applicable strategy and return candidates, markup-derived ones first."""
    candidates: list[CandidatePhrase] = []
    for step in dom_steps(settings):
        if not step.applies(page, len(candidates)):
            continue
        phrases = step.extract(page)
        logger.debug("Strategy finished", url=page.url, strategy=step.source.value, phrase_count=len(phrases))
        candidates.extend(candidates_from(step.source, phrases))

    if page.raw_markup:
        markup_phrases = extract_from_markup(
            page.raw_markup,
            min_length=settings.min_markup_line_length,
            max_length=settings.max_markup_line_length,
            max_lines=settings.max_markup_lines,
        )
        logger.debug(
            "Strategy finished",
            url=page.url,
            strategy=CandidateSource.MARKUP.value,
            phrase_count=len(markup_phrases),
        )
        candidates = candidates_from(CandidateSource.MARKUP, markup_phrases) + candidates

    return candidates


@with_operation_context("extract_page")
def extract_page(
    page: PageContext,
    movie_meta: MovieMeta | None = None,
    settings: ExtractionSettings | None = None,
) -> PageExtraction:
    """Extract filming location records and an audit snapshot from one page.

    Never raises for missing or odd page content: a page without locations
    simply yields no records and an audit snapshot with an empty list.

    Args:
        page: Parsed page, its URL and optional raw wiki markup
        movie_meta: Title/year override; derived from the page when None
        settings: Engine bounds and flags; defaults when None

    Returns:
        Records in priority order plus the page audit snapshot
    """
    settings = settings or ExtractionSettings()
    meta = movie_meta or derive_movie_meta(page)

    candidates = collect_candidates(page, settings)
    locations = normalize(
        candidates,
        validate_coordinates=settings.validate_coordinates,
        max_records=settings.max_records,
    )

    extracted_at = utcnow()
    records = [
        LocationRecord(
            movie_title=meta.title,
            year=meta.year,
            location_text=location.location_text,
            city=location.city,
            region=location.region,
            country=location.country,
            coordinates=location.coordinates,
            source_url=page.url,
            extracted_at=extracted_at,
        )
        for location in locations
    ]

    audit = PageAuditSnapshot(
        url=page.url,
        title=meta.title,
        extracted_locations=dedupe_phrases(candidates)[: settings.max_audit_locations],
        timestamp=extracted_at,
    )

    logger.info(
        "Extracted page locations",
        url=page.url,
        movie_title=meta.title,
        candidate_count=len(candidates),
        record_count=len(records),
        has_markup=page.raw_markup is not None,
    )

    return PageExtraction(records=records, audit=audit)
