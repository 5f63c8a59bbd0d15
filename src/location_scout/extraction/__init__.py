# ABOUTME: Filming location extraction engine and its input collaborators
# ABOUTME: Strategies, normalization and per-page orchestration

"""
Extraction Layer: Turn a movie page into filming location records

This layer handles:
- Candidate discovery (wiki markup, DOM headings, known listing layouts, keyword fallback)
- Phrase segmentation, coordinate parsing and field splitting
- Priority-ordered merging and deduplication per page

Data Flow: PageContext → candidate phrases → LocationRecords + PageAuditSnapshot
"""

from .base import ExtractionError, MarkupSource, PageFetcher
from .orchestrator import extract_page

__all__ = [
    "ExtractionError",
    "MarkupSource",
    "PageFetcher",
    "extract_page",
]
