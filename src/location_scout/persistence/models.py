# ABOUTME: Persistence models for extracted filming locations and page audit snapshots
# ABOUTME: Append-only location rows plus one overwritable audit row per page key

from __future__ import annotations

from datetime import datetime
from urllib.parse import quote

from sqlmodel import Column, Field, SQLModel

from location_scout.core.models import LocationRecord, PageAuditSnapshot, utcnow
from location_scout.persistence.json_types import PydanticJson

AUDIT_KEY_PREFIX = "pages/"


def audit_key(url: str) -> str:
    """Key under which a page's audit snapshot is stored."""
    return AUDIT_KEY_PREFIX + quote(url, safe="")


class LocationRow(SQLModel, table=True):
    """One extracted filming location. Rows are only ever appended."""

    __tablename__ = "location_record"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True, description="Primary key")
    movie_title: str = Field(default="", description="Movie title derived from the page")
    year: str = Field(default="", description="Release year derived from the title, may be empty")
    location_text: str = Field(description="Normalized location phrase")
    city: str = Field(default="", description="First comma-separated part of the phrase")
    region: str = Field(default="", description="Second part when the phrase has three or more parts")
    country: str = Field(default="", description="Trailing part(s) of the phrase")
    latitude: float | None = Field(default=None, description="Latitude when the phrase carried coordinates")
    longitude: float | None = Field(default=None, description="Longitude when the phrase carried coordinates")
    source_url: str = Field(index=True, description="Page the location was extracted from")
    extracted_at: datetime = Field(default_factory=utcnow, description="Extraction timestamp")

    @classmethod
    def from_record(cls, record: LocationRecord) -> LocationRow:
        return cls(
            movie_title=record.movie_title,
            year=record.year,
            location_text=record.location_text,
            city=record.city,
            region=record.region,
            country=record.country,
            latitude=record.latitude,
            longitude=record.longitude,
            source_url=record.source_url,
            extracted_at=record.extracted_at,
        )


class PageAuditRow(SQLModel, table=True):
    """Audit snapshot for one page, keyed by its URL-encoded address."""

    __tablename__ = "page_audit"  # type: ignore[assignment]

    key: str = Field(primary_key=True, description="pages/<url-encoded page URL>")
    url: str = Field(description="Page URL")
    title: str = Field(default="", description="Movie title derived from the page")
    extracted_locations: list[str] = Field(
        default_factory=list,
        sa_column=Column(PydanticJson(list[str])),
        description="Normalized phrases in priority order",
    )
    timestamp: datetime = Field(default_factory=utcnow, description="Extraction timestamp")

    def to_snapshot(self) -> PageAuditSnapshot:
        return PageAuditSnapshot(
            url=self.url,
            title=self.title,
            extracted_locations=list(self.extracted_locations or []),
            timestamp=self.timestamp,
        )
