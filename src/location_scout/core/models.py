# ABOUTME: Domain models for the filming location extraction engine
# ABOUTME: Page input context, candidate phrases, coordinates, output records and audit snapshots

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    """Returns the current UTC timestamp."""

    return datetime.now(UTC)


class CandidateSource(str, Enum):
    """Extraction strategies, declared from most to least reliable."""

    MARKUP = "markup"
    HEADING = "heading"
    LAYOUT = "layout"
    FALLBACK = "fallback"

    @property
    def priority(self) -> int:
        """Lower is more reliable."""
        return list(CandidateSource).index(self)


class PageContext(BaseModel):
    """Immutable input to one extraction run."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    url: str
    document: BeautifulSoup
    raw_markup: str | None = None


class CandidatePhrase(BaseModel):
    """A raw text fragment believed to describe a location, tagged with its strategy."""

    model_config = ConfigDict(frozen=True)

    text: str
    source: CandidateSource


class Coordinates(BaseModel):
    """A latitude/longitude pair. Both values are always present together."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float

    @property
    def is_plausible(self) -> bool:
        return abs(self.latitude) <= 90 and abs(self.longitude) <= 180


class MovieMeta(BaseModel):
    """Best-effort movie identification for a page. Never null, possibly empty."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    year: str = ""


class NormalizedLocation(BaseModel):
    """A deduplicated phrase split into structural fields, before page stamping."""

    model_config = ConfigDict(frozen=True)

    location_text: str
    city: str = ""
    region: str = ""
    country: str = ""
    coordinates: Coordinates | None = None
    source: CandidateSource


class LocationRecord(BaseModel):
    """One filming location found on a page, as handed to the record sink."""

    model_config = ConfigDict(frozen=True)

    movie_title: str = ""
    year: str = ""
    location_text: str
    city: str = ""
    region: str = ""
    country: str = ""
    coordinates: Coordinates | None = None
    source_url: str
    extracted_at: datetime = Field(default_factory=utcnow)

    @property
    def latitude(self) -> float | None:
        return self.coordinates.latitude if self.coordinates else None

    @property
    def longitude(self) -> float | None:
        return self.coordinates.longitude if self.coordinates else None

    def to_output(self) -> dict[str, Any]:
        """Flat representation with latitude/longitude keys, as written to sinks."""
        data = self.model_dump(mode="json", exclude={"coordinates"})
        data["latitude"] = self.latitude
        data["longitude"] = self.longitude
        return data


class PageAuditSnapshot(BaseModel):
    """Per-page diagnostic document kept for manual review."""

    model_config = ConfigDict(frozen=True)

    url: str
    title: str = ""
    extracted_locations: list[str] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=utcnow)


class PageExtraction(BaseModel):
    """Everything one extraction run produces for a page."""

    model_config = ConfigDict(frozen=True)

    records: list[LocationRecord] = Field(default_factory=list)
    audit: PageAuditSnapshot
