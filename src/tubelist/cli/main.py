"""
Main CLI entry point for tubelist.

Commands
--------
playlist
    Fetch a playlist's metadata and items.
search
    Search for videos or playlists.
resolve
    Resolve a playlist, channel or user reference to a playlist ID.
validate
    Check a playlist reference without network access.
version
    Show version information.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tubelist import __version__
from tubelist.cli.constants import (
    EXIT_CANCELLED,
    EXIT_SUCCESS,
    EXIT_USER_ERROR,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    MAX_CHANNEL_WIDTH,
    MAX_TITLE_WIDTH,
)
from tubelist.cli.errors import display_tubelist_error, display_warning_panel
from tubelist.container import container
from tubelist.exceptions import TransportError, TubelistError
from tubelist.models.enums import ItemKind
from tubelist.models.items import Item
from tubelist.models.results import (
    PlaylistInfo,
    PlaylistOptions,
    SearchOptions,
    SearchResult,
)

T = TypeVar("T")

console = Console()

app = typer.Typer(
    name="tubelist",
    help="Extract YouTube playlists and search results",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

_console_handler: Optional[logging.Handler] = None


class OutputFormat(str, Enum):
    """Output format options for result commands."""

    TABLE = "table"
    JSON = "json"


def _setup_logging(verbose: bool) -> None:
    """
    Configure the ``tubelist`` logger for a CLI run.

    With ``--verbose`` a stderr handler at DEBUG level is attached once;
    otherwise the level comes from settings.
    """
    global _console_handler

    root_logger = logging.getLogger("tubelist")
    if not verbose:
        root_logger.setLevel(container.settings.log_level)
        return

    root_logger.setLevel(logging.DEBUG)
    if _console_handler is None:
        _console_handler = logging.StreamHandler()
        _console_handler.setLevel(logging.DEBUG)
        _console_handler.setFormatter(
            logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        )
        root_logger.addHandler(_console_handler)


def _run(factory: Callable[[], Awaitable[T]], render: Callable[[T], None]) -> None:
    """
    Run a service coroutine and render its result.

    The transport is closed afterwards. Tubelist errors are displayed and
    mapped to exit codes. A transport failure that still produced a
    partial result renders it after a warning, then exits with the error
    code.
    """

    async def runner() -> T:
        try:
            return await factory()
        finally:
            await container.aclose()

    try:
        result = asyncio.run(runner())
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(EXIT_CANCELLED)
    except TransportError as e:
        code = display_tubelist_error(e)
        if e.partial_result is None:
            sys.exit(code)
        display_warning_panel(
            "Showing partial results fetched before the failure.",
            extra_info=f"{len(e.partial_result.items)} items",
        )
        render(e.partial_result)
        sys.exit(code)
    except TubelistError as e:
        sys.exit(display_tubelist_error(e))

    render(result)


def _truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 1] + "…"


def _print_json(data: Any) -> None:
    console.print(
        json.dumps(data, indent=2, ensure_ascii=False),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def _items_table(items: List[Item], title: str) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Type", style="magenta")
    table.add_column("Title", style="white")
    table.add_column("Channel", style="cyan")
    table.add_column("Length", justify="right", style="green")
    table.add_column("Views", justify="right")
    table.add_column("ID", style="dim", no_wrap=True)

    for i, item in enumerate(items, start=1):
        if item.type == ItemKind.PLAYLIST:
            length = f"{item.video_count} videos" if item.video_count is not None else ""
        elif item.is_live:
            length = "[red]LIVE[/red]"
        else:
            length = item.duration or ""

        table.add_row(
            str(i),
            item.type.value,
            escape(_truncate(item.title, MAX_TITLE_WIDTH)),
            escape(_truncate(item.author.name, MAX_CHANNEL_WIDTH)) if item.author else "",
            length,
            f"{item.views:,}" if item.views is not None else "",
            item.id or "",
        )
    return table


def _output_playlist(info: PlaylistInfo, format: OutputFormat) -> None:
    if format == OutputFormat.JSON:
        _print_json(info.model_dump(mode="json"))
        return

    details = [f"[bold]{escape(info.title)}[/bold]", info.url]
    if info.author:
        details.append(f"Owner: {escape(info.author.name)}")
    details.append(f"Videos: {info.total_items:,}")
    if info.views:
        details.append(f"Views: {info.views:,}")
    if info.last_updated:
        details.append(info.last_updated)

    console.print(Panel("\n".join(details), title="Playlist", border_style="blue"))
    console.print(_items_table(info.items, f"Items (showing {len(info.items)})"))


def _output_search(result: SearchResult, format: OutputFormat) -> None:
    if format == OutputFormat.JSON:
        _print_json(result.model_dump(mode="json"))
        return

    console.print(
        _items_table(
            result.items,
            f"Results for {escape(repr(result.query))} "
            f"(showing {len(result.items)} of about {result.results:,})",
        )
    )


@app.command()
def playlist(
    link_or_id: str = typer.Argument(..., help="Playlist ID, channel ID, or URL"),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-l", help="Maximum number of items (default from settings)"
    ),
    gl: Optional[str] = typer.Option(None, "--gl", help="Region code, e.g. US"),
    hl: Optional[str] = typer.Option(None, "--hl", help="Interface language, e.g. en"),
    retries: Optional[int] = typer.Option(
        None, "--retries", min=1, help="Attempts to find page data"
    ),
    format: OutputFormat = typer.Option(
        OutputFormat.TABLE, "--format", "-f", help="Output format"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug output to stderr"),
) -> None:
    """
    Fetch a playlist's metadata and items.

    Examples:
        tubelist playlist PLFgquLnL59alCl_2TQvOiD5Vgm1hCaGSI
        tubelist playlist "https://www.youtube.com/playlist?list=PL..." --limit 20
        tubelist playlist https://www.youtube.com/channel/UC... -f json

    Exit Codes:
        0: Success
        1: User error - invalid ID or URL
        2: System error - network failure or unusable response
        3: Cancelled - Ctrl+C pressed
    """
    _setup_logging(verbose)
    options = PlaylistOptions(limit=limit, gl=gl, hl=hl, retries=retries)
    _run(
        lambda: container.playlist_service.get_playlist(link_or_id, options),
        lambda info: _output_playlist(info, format),
    )


@app.command()
def search(
    query: str = typer.Argument(..., help="Search terms or a results filter link"),
    type: ItemKind = typer.Option(
        ItemKind.VIDEO, "--type", "-t", help="Result kind to return"
    ),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-l", help="Maximum number of results (default from settings)"
    ),
    safe_search: bool = typer.Option(
        False, "--safe-search", help="Request restricted mode"
    ),
    gl: Optional[str] = typer.Option(None, "--gl", help="Region code, e.g. US"),
    hl: Optional[str] = typer.Option(None, "--hl", help="Interface language, e.g. en"),
    retries: Optional[int] = typer.Option(
        None, "--retries", min=1, help="Attempts to find results"
    ),
    format: OutputFormat = typer.Option(
        OutputFormat.TABLE, "--format", "-f", help="Output format"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug output to stderr"),
) -> None:
    """
    Search YouTube for videos or playlists.

    Examples:
        tubelist search "lofi hip hop"
        tubelist search "lofi hip hop" --type playlist --limit 5 -f json
    """
    _setup_logging(verbose)
    options = SearchOptions(
        type=type,
        limit=limit,
        safe_search=safe_search,
        gl=gl,
        hl=hl,
        retries=retries,
    )
    _run(
        lambda: container.search_service.search(query, options),
        lambda result: _output_search(result, format),
    )


@app.command()
def resolve(
    link_or_id: str = typer.Argument(..., help="Playlist ID, channel ID, or URL"),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug output to stderr"),
) -> None:
    """
    Resolve a playlist reference to a playlist ID.

    Channel IDs and channel URLs resolve to the channel's uploads playlist;
    /user/ and /c/ URLs are resolved by fetching the channel page.
    """
    _setup_logging(verbose)
    _run(
        lambda: container.playlist_service.get_playlist_id(link_or_id),
        lambda playlist_id: console.print(playlist_id, markup=False, highlight=False),
    )


@app.command()
def validate(
    link_or_id: str = typer.Argument(..., help="Playlist ID, channel ID, or URL"),
) -> None:
    """
    Check whether a reference could name a playlist (no network access).

    Exit code 0 when valid, 1 otherwise.
    """
    if container.playlist_service.validate_id(link_or_id):
        console.print("[green]valid[/green]")
        raise typer.Exit(code=EXIT_SUCCESS)
    console.print("[red]invalid[/red]")
    raise typer.Exit(code=EXIT_USER_ERROR)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel(
            f"[bold blue]tubelist[/bold blue] v{__version__}",
            title="Version",
            border_style="blue",
        )
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit"
    ),
) -> None:
    """
    tubelist - Extract YouTube playlists and search results.

    Reads YouTube's web pages and internal browse/search API without an
    API key or account.
    """
    if version:
        console.print(f"tubelist v{__version__}")
        raise typer.Exit(code=EXIT_SUCCESS)

    if ctx.invoked_subcommand is None:
        console.print("[yellow]Use 'tubelist --help' for available commands[/yellow]")
        raise typer.Exit(code=EXIT_USER_ERROR)


if __name__ == "__main__":
    app()
