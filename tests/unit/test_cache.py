"""Tests for the on-disk cache helpers — lock markers and cache scans."""

from __future__ import annotations

import json
from datetime import datetime, timezone

from ravenfetch.core.cache import (
    DOWNLOAD_LOCK,
    is_locked,
    lock_path,
    read_lock,
    scan_cache,
    write_lock,
)
from ravenfetch.models.cache import LockMarker


class TestLockMarker:
    def test_write_creates_marker_file(self, tmp_path):
        marker = write_lock(tmp_path)

        assert lock_path(tmp_path) == tmp_path / DOWNLOAD_LOCK
        assert is_locked(tmp_path)
        assert read_lock(tmp_path) == marker

    def test_marker_is_single_iso_timestamp(self, tmp_path):
        stamp = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        write_lock(tmp_path, LockMarker(downloaded=stamp))

        data = json.loads((tmp_path / DOWNLOAD_LOCK).read_text())

        assert list(data) == ["downloaded"]
        assert datetime.fromisoformat(data["downloaded"]) == stamp

    def test_no_temp_files_left_behind(self, tmp_path):
        write_lock(tmp_path)
        write_lock(tmp_path)

        assert [p.name for p in tmp_path.iterdir()] == [DOWNLOAD_LOCK]

    def test_missing_marker_reads_as_none(self, tmp_path):
        assert read_lock(tmp_path) is None
        assert not is_locked(tmp_path)

    def test_corrupt_marker_reads_as_none(self, tmp_path):
        (tmp_path / DOWNLOAD_LOCK).write_text("{not json")

        assert read_lock(tmp_path) is None
        assert is_locked(tmp_path)


class TestScanCache:
    def test_missing_root_is_empty(self, tmp_path):
        assert scan_cache(tmp_path / "nope") == []

    def test_reports_complete_and_partial(self, tmp_path):
        done = tmp_path / "bbb"
        done.mkdir()
        (done / "app.zip").write_bytes(b"x")
        write_lock(done)

        partial = tmp_path / "aaa"
        partial.mkdir()
        (partial / "content.zip").write_bytes(b"y")

        (tmp_path / "stray.txt").write_text("not a cache dir")

        entries = scan_cache(tmp_path)

        assert [e.id for e in entries] == ["aaa", "bbb"]
        assert entries[0].complete is False
        assert entries[0].files == ["content.zip"]
        assert entries[1].complete is True
        assert entries[1].files == ["app.zip"]
