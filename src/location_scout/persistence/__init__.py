# ABOUTME: Database operations and data persistence layer
# ABOUTME: Record sink for location rows and key/value sink for page audit snapshots

"""
Persistence Layer: Save and retrieve extraction output

This layer handles:
- SQLModel tables for location records and page audits
- Append-only record storage and keyed audit upserts
- Database connection and transaction management

Data Flow: extraction/ output → Database → CLI review
"""

from .json_types import PydanticJson
from .manager import DatabaseManager
from .models import LocationRow, PageAuditRow, audit_key

__all__ = [
    "DatabaseManager",
    "LocationRow",
    "PageAuditRow",
    "PydanticJson",
    "audit_key",
]
