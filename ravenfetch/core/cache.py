"""On-disk cache state — lock markers and cache directory listings.

Layout: {download_root}/{id}/{filename} plus {download_root}/{id}/download.lock

A lock marker is written only after a fetch completes.  A directory that
holds a file but no marker is treated as a partial download.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from ravenfetch.models.cache import CacheEntry, LockMarker

logger = logging.getLogger(__name__)

DOWNLOAD_LOCK = "download.lock"


def lock_path(target_dir: Path) -> Path:
    """Return the lock-marker path for a cache directory."""
    return Path(target_dir) / DOWNLOAD_LOCK


def is_locked(target_dir: Path) -> bool:
    """Whether a lock marker exists for ``target_dir``."""
    return lock_path(target_dir).exists()


def write_lock(target_dir: Path, marker: LockMarker | None = None) -> LockMarker:
    """Atomically write a lock marker into ``target_dir``.

    The marker is written to a temp file in the same directory and renamed
    into place, so readers never observe a half-written marker.
    """
    marker = marker or LockMarker()
    target = lock_path(target_dir)
    fd, tmp_name = tempfile.mkstemp(
        dir=target.parent, prefix=f".{DOWNLOAD_LOCK}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(marker.model_dump_json().encode("utf-8"))
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return marker


def read_lock(target_dir: Path) -> LockMarker | None:
    """Return the parsed lock marker, or None if absent or unreadable."""
    path = lock_path(target_dir)
    if not path.exists():
        return None
    try:
        return LockMarker.model_validate_json(path.read_bytes())
    except (OSError, ValidationError) as exc:
        logger.warning("Unreadable lock marker %s: %s", path, exc)
        return None


def scan_cache(download_root: Path) -> list[CacheEntry]:
    """List every cache directory under ``download_root``, sorted by id."""
    root = Path(download_root)
    if not root.is_dir():
        return []

    entries: list[CacheEntry] = []
    for directory in sorted(p for p in root.iterdir() if p.is_dir()):
        marker = read_lock(directory)
        files = sorted(
            p.name
            for p in directory.iterdir()
            if p.is_file() and not p.name.startswith((DOWNLOAD_LOCK, f".{DOWNLOAD_LOCK}."))
        )
        entries.append(
            CacheEntry(
                id=directory.name,
                directory=directory,
                files=files,
                downloaded=marker.downloaded if marker else None,
            )
        )
    return entries
