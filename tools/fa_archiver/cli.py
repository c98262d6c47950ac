"""CLI entry-point for the Fur Affinity archiver."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .archiver import Archiver
from .config import DEFAULT_USER, ArchiverConfig, Session
from .errors import ConfigurationError
from .models import ListingType

console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=console)],
    )
    # Suppress noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _print_stats(stats: dict) -> None:
    table = Table(title="Archive Summary", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="bold")
    table.add_column("Count", justify="right")
    for key, val in stats.items():
        table.add_row(key.capitalize(), str(val))
    console.print(table)


def _fail(exc: ConfigurationError) -> None:
    console.print(f"[red]✗[/red] {exc}")
    for line in exc.hint:
        console.print(line, highlight=False)
    sys.exit(1)


@click.command()
@click.argument("username", required=False, envvar="FA_USER")
@click.option("--cookies", "cookies_path", envvar="FA_COOKIES", default="cookies.txt",
              type=click.Path(dir_okay=False, path_type=Path), help="Netscape cookies.txt export")
@click.option("--output", "output_dir", envvar="FA_OUTPUT_DIR", default=".",
              type=click.Path(file_okay=False, path_type=Path), help="Directory to archive into")
@click.option("--gallery/--no-gallery", default=True, help="Archive the main gallery")
@click.option("--scraps/--no-scraps", default=True, help="Archive the scraps folder")
@click.option("--no-progress", is_flag=True, help="Hide the progress spinner")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(
    username: str | None,
    cookies_path: Path,
    output_dir: Path,
    gallery: bool,
    scraps: bool,
    no_progress: bool,
    verbose: bool,
) -> None:
    """Fur Affinity Archiver – Save a user's gallery to disk.

    Each submission is written as <user>/<gallery|scraps>/<YYYY>/<MM>/<file>
    with a matching <file>.txt holding its title, description and stats.

    Example: fa-archiver rokah --output archive
    """
    _setup_logging(verbose)
    try:
        session = Session.from_cookies_txt(cookies_path)
    except ConfigurationError as exc:
        _fail(exc)

    if not username:
        username = click.prompt("Who should I fetch?", default=DEFAULT_USER).strip() or DEFAULT_USER

    listings = tuple(
        listing
        for listing, wanted in ((ListingType.GALLERY, gallery), (ListingType.SCRAPS, scraps))
        if wanted
    )
    cfg = ArchiverConfig(
        session=session,
        username=username,
        output_dir=output_dir,
        listings=listings,
        progress=not no_progress,
    )

    with Archiver(cfg) as archiver:
        console.print(f"[bold]Archiving [cyan]{username}[/cyan]...[/bold]")
        try:
            results = archiver.archive_all()
        except ConfigurationError as exc:
            _fail(exc)
        for listing, count in results.items():
            console.print(f"[green]✓[/green] Saved {count} submissions from {username}'s {listing}")
        _print_stats(archiver.stats)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
