"""Local filesystem "downloader" — copies a path into the cache."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import ClassVar

from ravenfetch.models.credentials import Credentials
from ravenfetch.protocols.base import DownloadError, TransferProtocol

logger = logging.getLogger(__name__)


class LocalDownloader:
    """Copies a local file to the destination.

    Matches every location, so it must stay last in dispatch order.
    Plain ``FileResolver.local()`` declarations never reach this class;
    they resolve to the source file itself without copying.
    """

    protocol: ClassVar[TransferProtocol] = TransferProtocol.LOCAL

    def __init__(self, credentials: Credentials | None = None) -> None:
        self.credentials = credentials or Credentials()

    @staticmethod
    def handles(url: str) -> bool:
        return True

    def download(self, url: str, destination: Path) -> None:
        source = Path(url).expanduser()
        logger.info("Local copy %s -> %s", source, destination)
        try:
            shutil.copyfile(source, destination)
        except OSError as exc:
            raise DownloadError(url, exc) from exc
