# ABOUTME: asyncclick command line interface for location_scout
# ABOUTME: Provides commands for extracting filming locations and reviewing stored audit snapshots

import json
from pathlib import Path

import anyio
import asyncclick as click
from rich.console import Console

from location_scout.config import get_config
from location_scout.core.service import LocationExtractionService
from location_scout.utils.logging import (
    LoggingMode,
    configure_logging,
    create_progress,
    get_logging_status,
    with_pipeline_context,
)
from location_scout.utils.rich_tables import (
    create_audit_table,
    create_locations_table,
    create_logging_status_table,
    print_rich_table,
)

console = Console()


def _display_extraction(extraction, json_output: bool) -> None:
    if json_output:
        for record in extraction.records:
            click.echo(json.dumps(record.to_output(), ensure_ascii=False))
        return

    if not extraction.records:
        console.print(f"[yellow]No filming locations found on {extraction.audit.url}[/yellow]")
        return

    print_rich_table(console, create_locations_table(extraction.records, extraction.audit.url))


@click.command()
@click.argument("urls", nargs=-1, required=True)
@click.option(
    "--html-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the page HTML from a file instead of fetching it (single URL only)",
)
@click.option("--no-markup", is_flag=True, help="Skip the raw wiki markup lookup")
@click.option("--browser", is_flag=True, help="Render pages in a headless browser before extracting")
@click.option("--validate-coordinates", is_flag=True, help="Discard implausible coordinates")
@click.option("--no-save", is_flag=True, help="Don't store records and audit snapshots")
@click.option("--database-url", help="Override the database URL for stored results")
@click.pass_context
async def extract(
    ctx,
    urls: tuple[str, ...],
    html_file: Path | None,
    no_markup: bool,
    browser: bool,
    validate_coordinates: bool,
    no_save: bool,
    database_url: str | None,
):
    """
    🎬 Extract filming locations from one or more movie pages.
    """
    if html_file is not None and len(urls) != 1:
        raise click.UsageError("--html-file can only be used with a single URL")

    json_output = ctx.obj["json_output"]
    base_config = get_config()
    updates: dict[str, object] = {}
    if no_markup:
        updates["use_wiki_markup"] = False
    if browser:
        updates["use_browser"] = True
    if validate_coordinates:
        updates["validate_coordinates"] = True
    if no_save:
        updates["save_results"] = False
    if database_url:
        updates["database_url"] = database_url
    config = base_config.model_copy(update=updates)

    service = LocationExtractionService(config=config)

    with with_pipeline_context("extract", page_count=len(urls)) as logger:
        try:
            if html_file is not None:
                html = await anyio.Path(html_file).read_bytes()
                extractions = [await service.extract_html(urls[0], html)]
            elif json_output or len(urls) == 1:
                extractions = await service.extract_many(urls)
            else:
                with create_progress(console) as progress:
                    task_id = progress.add_task("Extracting", total=len(urls))

                    def on_page(url: str, index: int, total: int) -> None:
                        progress.update(task_id, completed=index - 1, description=f"📄 {url}")

                    extractions = await service.extract_many(urls, progress_callback=on_page)
                    progress.update(task_id, completed=len(urls))
        finally:
            await service.close()

        for extraction in extractions:
            _display_extraction(extraction, json_output)

        failed = len(urls) - len(extractions)
        logger.info("Extraction finished", pages=len(extractions), failed=failed)
        if failed and not json_output:
            console.print(f"[red]❌ {failed} page(s) could not be fetched, see logs for details[/red]")


@click.command(name="show-audit")
@click.argument("url")
@click.option("--database-url", help="Override the database URL for stored results")
@click.pass_context
async def show_audit(ctx, url: str, database_url: str | None):
    """
    🗂️ Show the stored audit snapshot for a page.
    """
    config = get_config()
    if database_url:
        config = config.model_copy(update={"database_url": database_url, "save_results": True})

    service = LocationExtractionService(config=config)
    try:
        snapshot = await service.get_audit(url)
    finally:
        await service.close()

    if snapshot is None:
        console.print(f"[yellow]No audit snapshot stored for {url}[/yellow]")
        return

    if ctx.obj["json_output"]:
        click.echo(snapshot.model_dump_json())
        return

    print_rich_table(console, create_audit_table(snapshot))


def _setup_logging(json_output: bool, log_level: str | None, log_file: str | None) -> None:
    """Configure sinks from CLI flags, falling back to LOCATION_SCOUT_* settings.

    ``--json`` keeps stdout machine-readable, so it always selects production mode.
    """
    config = get_config()
    configure_logging(
        mode=LoggingMode.PRODUCTION if json_output else config.log_mode,
        log_level=log_level or config.log_level,
        log_file=log_file or (str(config.log_file) if config.log_file else None),
    )


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show where logs are written in the current mode.
    """
    print_rich_table(console, create_logging_status_table(get_logging_status()))


@click.group(invoke_without_command=True)
@click.option("--json", "json_output", is_flag=True, help="Output JSON instead of rich tables")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Write the readable log here instead of logs/location-scout.log")
@click.pass_context
def app(ctx, json_output: bool, log_level: str | None, log_file: str | None):
    """
    🎬 Location Scout - filming locations from movie pages

    Pulls filming locations out of encyclopedia articles and film database
    pages, splits them into city/region/country, and keeps any coordinates
    written alongside them.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json_output

    _setup_logging(json_output, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(extract)
app.add_command(show_audit)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
