"""``ravenfetch status`` — inspect the download cache.

Lists every cache directory with its files and whether a lock marker
vouches for them.  Entries without a marker are partial downloads that
the next resolution pass deletes and fetches again.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ravenfetch.config import ResolverSettings
from ravenfetch.core.cache import scan_cache

console = Console()


def status_cmd(
    root: Path = typer.Option(
        None,
        "--root",
        "-r",
        help="Download root to inspect (defaults to RAVENFETCH_DOWNLOAD_ROOT).",
    ),
) -> None:
    """Show cached artifacts and their completion state."""
    download_root = root or ResolverSettings().download_root
    entries = scan_cache(download_root)

    if not entries:
        console.print(f"[dim]No cached artifacts in {download_root}.[/dim]")
        return

    table = Table(title=f"Cache: {download_root}")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Files")
    table.add_column("Downloaded", justify="center")

    partial = 0
    for entry in entries:
        if entry.complete:
            state = f"[green]{entry.downloaded.isoformat()}[/green]"
        else:
            state = "[yellow]partial[/yellow]"
            partial += 1
        table.add_row(entry.id[:16], ", ".join(entry.files) or "-", state)

    console.print(table)
    if partial:
        console.print(
            f"[yellow]{partial} partial download(s) will be refetched "
            "on the next resolve.[/yellow]"
        )
