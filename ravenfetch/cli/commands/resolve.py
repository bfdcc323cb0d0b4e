"""``ravenfetch resolve`` — resolve every artifact in a manifest.

Downloads whatever is missing from the cache and prints the resolved
files, optionally restricted to some groups.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ravenfetch.cli.commands._common import load_resolver
from ravenfetch.core.registry import ResolutionError
from ravenfetch.protocols import DownloadError

console = Console()


def resolve_cmd(
    manifest: Path = typer.Argument(
        Path("ravenfetch.toml"),
        help="Path to the resolver manifest.",
    ),
    group: list[str] = typer.Option(
        None,
        "--group",
        "-g",
        help="Only resolve these groups (repeatable).",
    ),
    root: Path = typer.Option(
        None,
        "--root",
        "-r",
        help="Override the download root.",
    ),
    grouped: bool = typer.Option(
        False,
        "--grouped",
        help="Print one table per group.",
    ),
) -> None:
    """Resolve manifest artifacts into local files."""
    resolver = load_resolver(manifest, root)
    groups = set(group or [])
    group_filter = (lambda g: g in groups) if groups else None

    try:
        buckets = resolver.grouped_files(group_filter)
    except (DownloadError, ResolutionError) as exc:
        console.print(f"[red]Resolution failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if not buckets:
        console.print("[dim]Nothing to resolve.[/dim]")
        return

    if grouped:
        for name, files in buckets.items():
            table = Table(title=f"Group: {name}")
            table.add_column("File", style="cyan")
            for file in files:
                table.add_row(str(file))
            console.print(table)
        return

    table = Table(title="Resolved Files")
    table.add_column("Group", style="green")
    table.add_column("File", style="cyan")
    for name, files in buckets.items():
        for file in files:
            table.add_row(name, str(file))
    console.print(table)
