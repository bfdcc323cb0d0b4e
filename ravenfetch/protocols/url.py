"""Generic URL downloader for anything ``urllib.request`` can open."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import ClassVar
from urllib.error import URLError
from urllib.parse import urlsplit
from urllib.request import urlopen

from ravenfetch.models.credentials import Credentials
from ravenfetch.protocols.base import (
    DEFAULT_CHUNK_SIZE,
    DownloadError,
    TransferProtocol,
    redact,
)

logger = logging.getLogger(__name__)

FETCHABLE_SCHEMES: frozenset[str] = frozenset({"http", "https", "ftp", "file", "data"})


class UrlDownloader:
    """Fallback fetcher for absolute URIs with a urllib-supported scheme."""

    protocol: ClassVar[TransferProtocol] = TransferProtocol.URL

    def __init__(self, credentials: Credentials | None = None) -> None:
        self.credentials = credentials or Credentials()

    @staticmethod
    def handles(url: str) -> bool:
        return urlsplit(url).scheme.lower() in FETCHABLE_SCHEMES

    def download(self, url: str, destination: Path) -> None:
        logger.info("URL download %s -> %s", redact(url), destination)
        try:
            with urlopen(url) as response, destination.open("wb") as target:
                shutil.copyfileobj(response, target, DEFAULT_CHUNK_SIZE)
        except (URLError, OSError, ValueError) as exc:
            raise DownloadError(url, exc) from exc
