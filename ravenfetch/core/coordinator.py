"""Download coordinator — per-artifact caching decisions.

``materialize`` is idempotent: once the file and its lock marker exist, a
repeated call performs no fetch and returns the same path.  It is not safe
against two processes resolving the same id at once; both may fetch, and
the marker records the last writer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ravenfetch.core.cache import is_locked, write_lock
from ravenfetch.protocols.base import file_name, redact

logger = logging.getLogger(__name__)


class DownloadCoordinator:
    """Materializes one artifact into its cache directory.

    Steps
    -----
    1. Create ``target_dir`` and derive the file name from the URL.
    2. No lock marker but a file present: delete it as a partial download.
    3. No file: call ``fetch(file)``, then write the lock marker.
    4. Return the file path.
    """

    def materialize(
        self,
        url: str,
        target_dir: Path,
        fetch: Callable[[Path], None],
    ) -> Path:
        target_dir = Path(target_dir)
        target_dir.mkdir(parents=True, exist_ok=True)

        file = target_dir / file_name(url)
        if not is_locked(target_dir) and file.exists():
            logger.warning("Deleting partial download %s", file)
            file.unlink()

        if not file.exists():
            logger.info("Fetching %s into %s", redact(url), target_dir)
            fetch(file)
            marker = write_lock(target_dir)
            logger.debug("Lock marker written for %s at %s", file.name, marker.downloaded)
        else:
            logger.debug("Cache hit: %s", file)

        return file
