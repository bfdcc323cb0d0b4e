"""HTTP/HTTPS downloader backed by requests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

import requests

from ravenfetch.models.credentials import Credentials
from ravenfetch.protocols.base import (
    DEFAULT_CHUNK_SIZE,
    DownloadError,
    TransferProtocol,
    redact,
)

logger = logging.getLogger(__name__)


class HttpDownloader:
    """Streams ``http://`` and ``https://`` resources to disk.

    Basic auth is used when a username is configured.  Certificate
    validation is skipped while ``ignore_certificate_validation`` is set,
    which is the default.
    """

    protocol: ClassVar[TransferProtocol] = TransferProtocol.HTTP

    def __init__(self, credentials: Credentials | None = None) -> None:
        self.credentials = credentials or Credentials()

    @staticmethod
    def handles(url: str) -> bool:
        lowered = url.lower()
        return lowered.startswith("http://") or lowered.startswith("https://")

    def _auth(self) -> tuple[str, str] | None:
        if not self.credentials.username:
            return None
        return self.credentials.username, self.credentials.secret or ""

    def download(self, url: str, destination: Path) -> None:
        verify = not self.credentials.ignore_certificate_validation
        logger.info("HTTP download %s -> %s", redact(url), destination)
        if not verify:
            logger.debug("Certificate validation disabled for %s", redact(url))

        try:
            with requests.get(
                url, auth=self._auth(), verify=verify, stream=True
            ) as response:
                response.raise_for_status()
                with destination.open("wb") as target:
                    for chunk in response.iter_content(chunk_size=DEFAULT_CHUNK_SIZE):
                        if chunk:
                            target.write(chunk)
        except (requests.RequestException, OSError) as exc:
            raise DownloadError(url, exc) from exc
