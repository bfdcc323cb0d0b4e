"""SMB downloader backed by smbprotocol's ``smbclient`` API."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import ClassVar
from urllib.parse import unquote, urlsplit

import smbclient
from smbprotocol.exceptions import SMBException

from ravenfetch.models.credentials import Credentials
from ravenfetch.protocols.base import (
    DEFAULT_CHUNK_SIZE,
    DownloadError,
    TransferProtocol,
    redact,
)

logger = logging.getLogger(__name__)

DEFAULT_SMB_PORT: int = 445


def to_unc(url: str) -> tuple[str, str, int]:
    """Split an SMB location into ``(server, unc_path, port)``.

    Accepts ``smb://server[:port]/share/path`` and ``\\\\server\\share\\path``.
    """
    if url.startswith("\\\\"):
        server = url[2:].split("\\", 1)[0]
        return server, url, DEFAULT_SMB_PORT

    parts = urlsplit(url)
    server = parts.hostname or ""
    segments = [s for s in unquote(parts.path).split("/") if s]
    unc = "\\\\" + "\\".join([server, *segments])
    return server, unc, parts.port or DEFAULT_SMB_PORT


class SmbDownloader:
    """Fetches files from SMB shares.

    A configured ``domain`` is sent as ``DOMAIN\\username``.  Without a
    username the session falls back to whatever smbclient negotiates
    (Kerberos or guest).
    """

    protocol: ClassVar[TransferProtocol] = TransferProtocol.SMB

    def __init__(self, credentials: Credentials | None = None) -> None:
        self.credentials = credentials or Credentials()

    @staticmethod
    def handles(url: str) -> bool:
        return url.lower().startswith("smb://") or url.startswith("\\\\")

    def _session_username(self) -> str | None:
        username = self.credentials.username
        if username and self.credentials.domain:
            return f"{self.credentials.domain}\\{username}"
        return username

    def download(self, url: str, destination: Path) -> None:
        try:
            server, unc, port = to_unc(url)
        except ValueError as exc:
            raise DownloadError(url, exc) from exc
        if not server:
            raise DownloadError(url, "SMB location needs a server")

        logger.info("SMB download %s -> %s", redact(url), destination)
        try:
            smbclient.register_session(
                server,
                username=self._session_username(),
                password=self.credentials.secret,
                port=port,
            )
            with smbclient.open_file(unc, mode="rb", port=port) as source:
                with destination.open("wb") as target:
                    shutil.copyfileobj(source, target, DEFAULT_CHUNK_SIZE)
        except (SMBException, OSError, ValueError) as exc:
            raise DownloadError(url, exc) from exc
