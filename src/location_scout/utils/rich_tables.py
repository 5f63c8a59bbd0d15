# ABOUTME: Rich table builders for the CLI output of extraction runs
# ABOUTME: One table per page of location records, audit snapshot summaries and logging status

from collections.abc import Iterable
from typing import Any

from rich.box import ROUNDED, SIMPLE, Box
from rich.console import Console
from rich.table import Table

from location_scout.core.models import LocationRecord, PageAuditSnapshot

NO_COORDINATES = "-"

# (header, style) per column of the locations table
LOCATION_COLUMNS = (
    ("Location", "white"),
    ("City", "green"),
    ("Region", "yellow"),
    ("Country", "blue"),
)


def _base_table(title: str, box: Box = ROUNDED, expand: bool = False) -> Table:
    return Table(
        title=title,
        box=box,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=expand,
    )


def _field_table(title: str, rows: Iterable[tuple[str, str]], key_style: str, box: Box = ROUNDED) -> Table:
    """Two-column Field/Value table."""
    table = _base_table(title, box=box)
    table.add_column("Field", style=key_style)
    table.add_column("Value", style="white")
    for field, value in rows:
        table.add_row(field, value)
    return table


def format_coordinates(record: LocationRecord) -> str:
    if record.coordinates is None:
        return NO_COORDINATES
    return f"{record.coordinates.latitude:.4f}, {record.coordinates.longitude:.4f}"


def create_locations_table(records: list[LocationRecord], url: str) -> Table:
    """Create a table of the location records extracted from one page.

    Args:
        records: Records in priority order
        url: Page the records came from

    Returns:
        Styled records table, one row per record
    """
    table = _base_table(f"[bold cyan]🎬 Filming locations[/bold cyan] [dim]{url}[/dim]", expand=True)
    table.row_styles = ["", "dim"]

    table.add_column("#", style="dim", justify="right")
    for header, style in LOCATION_COLUMNS:
        table.add_column(header, style=style)
    table.add_column("Coordinates", style="magenta", no_wrap=True)

    for index, record in enumerate(records, start=1):
        table.add_row(
            str(index),
            record.location_text,
            record.city,
            record.region,
            record.country,
            format_coordinates(record),
        )

    return table


def create_audit_table(snapshot: PageAuditSnapshot) -> Table:
    """Summary of a stored audit snapshot followed by its phrases, numbered."""
    header_rows = [
        ("🔗 URL", snapshot.url),
        ("🎬 Title", snapshot.title or "Unknown"),
        ("🕒 Extracted", snapshot.timestamp.isoformat()),
        ("📍 Locations", str(len(snapshot.extracted_locations))),
    ]
    phrase_rows = [(f"  {index}", phrase) for index, phrase in enumerate(snapshot.extracted_locations, start=1)]

    return _field_table(
        "[bold green]🗂️ Page Audit Snapshot[/bold green]",
        header_rows + phrase_rows,
        key_style="cyan",
        box=SIMPLE,
    )


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Table describing where logs go in the current mode."""
    rows = [
        ("🔧 Mode", status["mode"].title()),
        ("📁 Log Directory", status["log_directory"] or "N/A (production mode)"),
        ("🔇 Suppressed Libraries", ", ".join(status["third_party_suppressed"])),
    ]

    log_files = status["log_files"]
    for key, label in (("main", "📝 Main Log"), ("json", "📊 JSON Log"), ("errors", "🚨 Error Log")):
        if log_files.get(key):
            rows.append((label, log_files[key]))

    return _field_table("[bold green]🔍 Logging Configuration[/bold green]", rows, key_style="blue")


def print_rich_table(console: Console, table: Table) -> None:
    """Print a table with a blank line above and below."""
    console.print()
    console.print(table)
    console.print()
