"""Ravenfetch CLI — Typer-based command-line interface.

Provides the ``ravenfetch`` command with subcommands for resolving a
manifest, printing its configuration hash, and inspecting the download
cache.

All output uses Rich for formatted terminal display.
"""
