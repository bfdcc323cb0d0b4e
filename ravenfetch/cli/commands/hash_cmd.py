"""``ravenfetch hash`` — print the configuration hash of a manifest.

The hash changes whenever an artifact is added, removed, reordered or its
defining inputs change, so build tools can use it as a cache key.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from ravenfetch.cli.commands._common import load_resolver

console = Console()


def hash_cmd(
    manifest: Path = typer.Argument(
        Path("ravenfetch.toml"),
        help="Path to the resolver manifest.",
    ),
    ids: bool = typer.Option(
        False,
        "--ids",
        help="Also print each resolver id with its group.",
    ),
) -> None:
    """Print the configuration hash without resolving anything."""
    resolver = load_resolver(manifest)

    if ids:
        for spec in resolver.specs:
            console.print(f"[dim]{spec.group}[/dim]  {spec.id}")

    # Plain output for scripting
    console.print(resolver.configuration_hash(), highlight=False)
