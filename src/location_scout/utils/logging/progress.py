# ABOUTME: Progress display for batch page extraction using Rich's built-in capabilities
# ABOUTME: A bar with a per-page description, transient so it never pollutes captured output

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn


def create_progress(console: Console) -> Progress:
    """Create a transient progress display for a batch of pages.

    Args:
        console: Rich console instance

    Returns:
        Progress instance; add one task per batch
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    )
