"""Shared test fixtures for Ravenfetch."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from ravenfetch.core.registry import FileResolver


@pytest.fixture
def download_root(tmp_path: Path) -> Path:
    """Provide a download root inside the test's temp directory."""
    return tmp_path / "downloads"


@pytest.fixture
def resolver(download_root: Path, tmp_path: Path) -> FileResolver:
    """Provide an empty FileResolver rooted in a temp directory."""
    return FileResolver(download_root, base_dir=tmp_path)


@pytest.fixture
def local_artifact(tmp_path: Path) -> Path:
    """Provide an existing local file to register as a pass-through."""
    path = tmp_path / "a.zip"
    path.write_bytes(b"local archive")
    return path


@pytest.fixture
def fake_urlopen(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Replace the generic URL fetcher's urlopen; returns the list of fetched URLs."""
    calls: list[str] = []

    def _urlopen(url: str) -> io.BytesIO:
        calls.append(url)
        return io.BytesIO(f"payload:{url}".encode("utf-8"))

    monkeypatch.setattr("ravenfetch.protocols.url.urlopen", _urlopen)
    return calls
