# ABOUTME: End-to-end tests for per-page extraction across all strategies
# ABOUTME: Strategy cascade rules, movie metadata, record stamping and audit snapshots

from location_scout.config import ExtractionSettings
from location_scout.core.models import CandidateSource, Coordinates, MovieMeta
from location_scout.extraction.orchestrator import collect_candidates, derive_movie_meta, dom_steps, extract_page
from location_scout.extraction.wiki import page_from_html

WIKI_URL = "https://en.wikipedia.org/wiki/Example_(2010_film)"
IMDB_LOCATIONS_URL = "https://www.imdb.com/title/tt1375666/locations"


def make_page(html: str, url: str = "https://example.com/movie", raw_markup: str | None = None):
    return page_from_html(url, html, raw_markup)


class TestDomSteps:
    def test_order(self):
        sources = [step.source for step in dom_steps(ExtractionSettings())]
        assert sources == [CandidateSource.HEADING, CandidateSource.LAYOUT, CandidateSource.FALLBACK]


class TestDeriveMovieMeta:
    def test_title_and_year_from_heading(self):
        page = make_page('<h1 id="firstHeading">Inception (2010 film)</h1>')
        assert derive_movie_meta(page) == MovieMeta(title="Inception (2010 film)", year="2010")

    def test_og_title_when_no_heading(self):
        page = make_page('<html><head><meta property="og:title" content=" Heat (1995) - IMDb "></head></html>')
        assert derive_movie_meta(page) == MovieMeta(title="Heat (1995) - IMDb", year="1995")

    def test_no_year(self):
        page = make_page("<h1>Amélie</h1>")
        assert derive_movie_meta(page) == MovieMeta(title="Amélie", year="")

    def test_nothing_to_go_on(self):
        assert derive_movie_meta(make_page("<p>text</p>")) == MovieMeta()


class TestCollectCandidates:
    def test_markup_is_prepended(self):
        page = make_page(
            "<h2>Filming locations</h2><p>London, UK</p>",
            url=WIKI_URL,
            raw_markup="== Filming locations ==\n* Paris, France\n",
        )
        candidates = collect_candidates(page, ExtractionSettings())
        assert [(c.text, c.source) for c in candidates] == [
            ("Paris, France", CandidateSource.MARKUP),
            ("London, UK", CandidateSource.HEADING),
        ]

    def test_fallback_skipped_when_heading_found_something(self):
        page = make_page("<h2>Filming locations</h2><p>London, UK</p><p>Other location notes</p>")
        candidates = collect_candidates(page, ExtractionSettings())
        assert [c.source for c in candidates] == [CandidateSource.HEADING, CandidateSource.HEADING]

    def test_fallback_runs_when_nothing_found(self):
        page = make_page("<p>Locations used include Malta.</p><p>Plot.</p>")
        candidates = collect_candidates(page, ExtractionSettings())
        assert [(c.text, c.source) for c in candidates] == [
            ("Locations used include Malta.", CandidateSource.FALLBACK)
        ]

    def test_listing_url_runs_layout_after_heading_hits(self):
        page = make_page(
            "<div class='soda'>Osaka, Japan</div><h2>Filming locations</h2><p>Tokyo, Japan</p>",
            url=IMDB_LOCATIONS_URL,
        )
        candidates = collect_candidates(page, ExtractionSettings())
        assert [(c.text, c.source) for c in candidates] == [
            ("Tokyo, Japan", CandidateSource.HEADING),
            ("Osaka, Japan", CandidateSource.LAYOUT),
        ]

    def test_listing_container_ignored_once_something_was_found(self):
        page = make_page(
            "<div id='filmingLocations'><div class='soda'>Osaka, Japan</div></div>"
            "<h2>Filming locations</h2><p>Tokyo, Japan</p>"
        )
        candidates = collect_candidates(page, ExtractionSettings())
        assert [c.text for c in candidates] == ["Tokyo, Japan"]

    def test_listing_container_used_when_nothing_else_found(self):
        page = make_page("<div id='filmingLocations'><div class='soda'>Osaka, Japan</div></div>")
        candidates = collect_candidates(page, ExtractionSettings())
        assert [(c.text, c.source) for c in candidates] == [("Osaka, Japan", CandidateSource.LAYOUT)]

    def test_sibling_bound_comes_from_settings(self):
        paragraphs = "".join(f"<p>Place {index}</p>" for index in range(10))
        page = make_page(f"<h2>Filming locations</h2>{paragraphs}")
        candidates = collect_candidates(page, ExtractionSettings(max_sibling_steps=3))
        assert [c.text for c in candidates] == ["Place 0", "Place 1", "Place 2"]


class TestExtractPage:
    def test_heading_paragraph_scenario(self):
        page = make_page(
            "<h1>Example (2010 film)</h1><h2>Filming locations</h2><p>Paris, France; London, UK</p>",
            url=WIKI_URL,
        )
        extraction = extract_page(page)

        assert [(r.city, r.country) for r in extraction.records] == [("Paris", "France"), ("London", "UK")]
        assert all(record.coordinates is None for record in extraction.records)
        assert all(record.movie_title == "Example (2010 film)" for record in extraction.records)
        assert all(record.year == "2010" for record in extraction.records)
        assert all(record.source_url == WIKI_URL for record in extraction.records)
        assert extraction.audit.extracted_locations == ["Paris, France", "London, UK"]

    def test_coordinates_scenario(self):
        page = make_page(
            '<ul><li class="filming-location">Golden Gate Bridge, San Francisco, 37.8199, -122.4783</li></ul>',
            url=IMDB_LOCATIONS_URL,
        )
        extraction = extract_page(page)

        assert len(extraction.records) == 1
        record = extraction.records[0]
        assert record.city == "Golden Gate Bridge"
        assert record.region == "San Francisco"
        assert record.country == "37.8199, -122.4783"
        assert record.coordinates == Coordinates(latitude=37.8199, longitude=-122.4783)

    def test_nothing_found_scenario(self):
        page = make_page("<h1>Quiet Film (1999)</h1><p>The film premiered in Cannes.</p>", url=WIKI_URL)
        extraction = extract_page(page)

        assert extraction.records == []
        assert extraction.audit.url == WIKI_URL
        assert extraction.audit.title == "Quiet Film (1999)"
        assert extraction.audit.extracted_locations == []

    def test_markup_wins_duplicates(self):
        page = make_page(
            "<h2>Filming locations</h2><p>London, UK; Rome, Italy</p>",
            url=WIKI_URL,
            raw_markup="== Filming locations ==\n* [[Paris]], France\n* london, uk\n== Release ==\n",
        )
        extraction = extract_page(page)

        assert [r.location_text for r in extraction.records] == ["Paris, France", "london, uk", "Rome, Italy"]
        assert extraction.audit.extracted_locations == ["Paris, France", "london, uk", "Rome, Italy"]

    def test_movie_meta_override(self):
        page = make_page("<h1>Ignored</h1><h2>Filming locations</h2><p>Rome, Italy</p>")
        extraction = extract_page(page, movie_meta=MovieMeta(title="Roman Holiday", year="1953"))
        assert extraction.records[0].movie_title == "Roman Holiday"
        assert extraction.records[0].year == "1953"
        assert extraction.audit.title == "Roman Holiday"

    def test_records_share_extraction_time(self):
        page = make_page("<h2>Filming locations</h2><p>Rome, Italy; Milan, Italy</p>")
        extraction = extract_page(page)
        assert extraction.records[0].extracted_at == extraction.records[1].extracted_at
        assert extraction.audit.timestamp == extraction.records[0].extracted_at

    def test_record_and_audit_caps(self):
        items = "".join(f"<li>Town {index}, Country</li>" for index in range(600))
        page = make_page(f"<ul>{items}</ul>", url=IMDB_LOCATIONS_URL)
        extraction = extract_page(page)
        assert len(extraction.records) == 200
        assert len(extraction.audit.extracted_locations) == 500

    def test_coordinate_validation_setting(self):
        page = make_page("<li>Somewhere, 123.5, 45.25</li>", url=IMDB_LOCATIONS_URL)
        assert extract_page(page).records[0].coordinates is not None
        strict = extract_page(page, settings=ExtractionSettings(validate_coordinates=True))
        assert strict.records[0].coordinates is None

    def test_output_row(self):
        page = make_page("<li>Marina, 37.8, -122.4</li>", url=IMDB_LOCATIONS_URL)
        row = extract_page(page).records[0].to_output()
        assert row["latitude"] == 37.8
        assert row["longitude"] == -122.4
        assert "coordinates" not in row
        assert row["source_url"] == IMDB_LOCATIONS_URL
