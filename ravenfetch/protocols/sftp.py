"""SFTP downloader backed by paramiko."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar
from urllib.parse import unquote, urlsplit

import paramiko

from ravenfetch.models.credentials import Credentials
from ravenfetch.protocols.base import DownloadError, TransferProtocol, redact

logger = logging.getLogger(__name__)

DEFAULT_SFTP_PORT: int = 22


class SftpDownloader:
    """Fetches ``sftp://[user[:password]@]host[:port]/path`` locations.

    With ``host_checking`` enabled (the default) the system known-hosts
    file is loaded and unknown host keys are rejected.  With it disabled,
    unknown hosts are trusted and added for the session.

    Explicit credentials win over credentials embedded in the URL.
    """

    protocol: ClassVar[TransferProtocol] = TransferProtocol.SFTP

    def __init__(self, credentials: Credentials | None = None) -> None:
        self.credentials = credentials or Credentials()

    @staticmethod
    def handles(url: str) -> bool:
        return url.lower().startswith("sftp://")

    def download(self, url: str, destination: Path) -> None:
        parts = urlsplit(url)
        if not parts.hostname or not parts.path:
            raise DownloadError(url, "SFTP URL needs a host and a path")
        try:
            port = parts.port or DEFAULT_SFTP_PORT
        except ValueError as exc:
            raise DownloadError(url, exc) from exc

        username = self.credentials.username or parts.username
        password = self.credentials.secret or parts.password

        client = paramiko.SSHClient()
        if self.credentials.host_checking:
            client.load_system_host_keys()
            client.set_missing_host_key_policy(paramiko.RejectPolicy())
        else:
            client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        logger.info("SFTP download %s -> %s", redact(url), destination)
        try:
            client.connect(
                parts.hostname,
                port=port,
                username=username,
                password=password,
                look_for_keys=password is None,
                allow_agent=password is None,
            )
            with client.open_sftp() as sftp:
                sftp.get(unquote(parts.path), str(destination))
        except (paramiko.SSHException, OSError) as exc:
            raise DownloadError(url, exc) from exc
        finally:
            client.close()
