"""Unit tests for the CLI — Typer command registration and basic behavior.

Exercises the resolve, hash and status commands via typer.testing.CliRunner
against manifests that only declare local files.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from ravenfetch.cli.app import app
from ravenfetch.config import ResolverSettings
from ravenfetch.core.cache import write_lock
from ravenfetch.core.loader import build_resolver
from ravenfetch.models.manifest import ResolverManifest

runner = CliRunner()


@pytest.fixture
def manifest_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A manifest with two local artifacts in separate groups."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.zip").write_bytes(b"a")
    (tmp_path / "b.zip").write_bytes(b"b")
    path = tmp_path / "ravenfetch.toml"
    path.write_text(
        'download_root = "cache"\n\n'
        '[[artifacts]]\nurl = "a.zip"\n\n'
        '[[artifacts]]\nurl = "b.zip"\ngroup = "extra"\n'
    )
    return path


# ---------------------------------------------------------------------------
# Test: CLI help and registration
# ---------------------------------------------------------------------------


class TestCliApp:
    """The CLI must register all expected commands and show help."""

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        # Typer's no_args_is_help may exit with 0 or 2 depending on version
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "resolve" in result.output
        assert "hash" in result.output
        assert "status" in result.output

    @pytest.mark.parametrize("command", ["resolve", "hash", "status"])
    def test_command_help(self, command):
        result = runner.invoke(app, [command, "--help"])
        assert result.exit_code == 0


# ---------------------------------------------------------------------------
# Test: resolve
# ---------------------------------------------------------------------------


class TestResolveCommand:
    def test_resolves_all_groups(self, manifest_path):
        result = runner.invoke(app, ["resolve", str(manifest_path)])
        assert result.exit_code == 0, result.output
        assert "Resolved Files" in result.output
        assert "extra" in result.output

    def test_grouped_tables(self, manifest_path):
        result = runner.invoke(app, ["resolve", str(manifest_path), "--grouped"])
        assert result.exit_code == 0, result.output
        assert "Group: default" in result.output
        assert "Group: extra" in result.output

    def test_group_filter_without_matches(self, manifest_path):
        result = runner.invoke(app, ["resolve", str(manifest_path), "-g", "nothing"])
        assert result.exit_code == 0, result.output
        assert "Nothing to resolve." in result.output

    def test_missing_local_file_fails(self, manifest_path):
        (manifest_path.parent / "b.zip").unlink()

        result = runner.invoke(app, ["resolve", str(manifest_path)])

        assert result.exit_code == 1
        assert "Resolution failed" in result.output

    def test_invalid_manifest_fails(self, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("[[artifacts]]\n")

        result = runner.invoke(app, ["resolve", str(bad)])

        assert result.exit_code == 1
        assert "Invalid manifest" in result.output


# ---------------------------------------------------------------------------
# Test: hash and status
# ---------------------------------------------------------------------------


class TestHashCommand:
    def test_prints_configuration_hash(self, manifest_path):
        expected = build_resolver(
            ResolverManifest.load(manifest_path),
            ResolverSettings(),
            base_dir=manifest_path.parent,
        ).configuration_hash()

        result = runner.invoke(app, ["hash", str(manifest_path)])

        assert result.exit_code == 0, result.output
        assert expected in result.output

    def test_ids_flag_lists_groups(self, manifest_path):
        result = runner.invoke(app, ["hash", str(manifest_path), "--ids"])
        assert result.exit_code == 0, result.output
        assert "extra" in result.output


class TestStatusCommand:
    def test_empty_root(self, tmp_path):
        result = runner.invoke(app, ["status", "--root", str(tmp_path / "cache")])
        assert result.exit_code == 0
        assert "No cached artifacts" in result.output

    def test_reports_partial_and_complete(self, tmp_path):
        root = tmp_path / "cache"
        done = root / ("a" * 64)
        done.mkdir(parents=True)
        (done / "app.zip").write_bytes(b"x")
        write_lock(done)
        partial = root / ("b" * 64)
        partial.mkdir()
        (partial / "content.zip").write_bytes(b"y")

        result = runner.invoke(app, ["status", "--root", str(root)])

        assert result.exit_code == 0, result.output
        assert "a" * 16 in result.output
        assert "partial" in result.output
        assert "1 partial download(s)" in result.output
