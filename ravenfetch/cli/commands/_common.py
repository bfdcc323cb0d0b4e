"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from ravenfetch.config import ResolverSettings
from ravenfetch.core.loader import build_resolver
from ravenfetch.core.registry import FileResolver
from ravenfetch.models.manifest import ManifestError, ResolverManifest

console = Console(stderr=True)


def load_resolver(manifest_path: Path, root: Path | None = None) -> FileResolver:
    """Load a manifest into a resolver, exiting with code 1 on bad input."""
    try:
        manifest = ResolverManifest.load(manifest_path)
        if root is not None:
            manifest = manifest.model_copy(update={"download_root": root})
        return build_resolver(
            manifest, ResolverSettings(), base_dir=manifest_path.parent
        )
    except (ManifestError, ValueError) as exc:
        console.print(f"[red]Invalid manifest:[/red] {exc}")
        raise typer.Exit(code=1) from exc
