"""Main Typer application — imports and registers all CLI commands.

Entry point: ``ravenfetch`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from ravenfetch.cli.commands.hash_cmd import hash_cmd
from ravenfetch.cli.commands.resolve import resolve_cmd
from ravenfetch.cli.commands.status import status_cmd
from ravenfetch.config import ResolverSettings

app = typer.Typer(
    name="ravenfetch",
    help="Ravenfetch: cached artifact resolution over SFTP, SMB, HTTP and local paths.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
) -> None:
    """Configure logging before any command runs."""
    level = "DEBUG" if verbose else ResolverSettings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True), rich_tracebacks=True, show_path=False
            )
        ],
        force=True,
    )


# Register subcommands
app.command(name="resolve", help="Resolve manifest artifacts into local files.")(resolve_cmd)
app.command(name="hash", help="Print the configuration hash of a manifest.")(hash_cmd)
app.command(name="status", help="Show cached artifacts and partial downloads.")(status_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
