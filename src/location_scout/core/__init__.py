# ABOUTME: Domain models and the orchestration service layer
# ABOUTME: Page inputs, location records, audit snapshots, and the end-to-end extraction service

"""
Core Layer: Domain objects and workflow orchestration

This layer handles:
- Domain models shared by extraction, persistence and the CLI
- The service API that fetches pages, runs extraction and stores results

Data Flow: URLs → extraction/ engine → persistence/ sinks
"""

from .models import (
    CandidatePhrase,
    CandidateSource,
    Coordinates,
    LocationRecord,
    MovieMeta,
    NormalizedLocation,
    PageAuditSnapshot,
    PageContext,
    PageExtraction,
)

# Import service on-demand to avoid circular imports
# Use: from location_scout.core.service import LocationExtractionService

__all__ = [
    "CandidatePhrase",
    "CandidateSource",
    "Coordinates",
    "LocationRecord",
    "MovieMeta",
    "NormalizedLocation",
    "PageAuditSnapshot",
    "PageContext",
    "PageExtraction",
]
