"""Protocol dispatch — maps a location string to exactly one downloader.

Classification walks ``TransferProtocol`` in declaration order and the
first downloader whose ``handles()`` accepts the location wins.  LOCAL
accepts everything, so classification is total.  No I/O happens here.
"""

from __future__ import annotations

from ravenfetch.models.credentials import Credentials
from ravenfetch.protocols.base import Downloader, TransferProtocol
from ravenfetch.protocols.http import HttpDownloader
from ravenfetch.protocols.local import LocalDownloader
from ravenfetch.protocols.sftp import SftpDownloader
from ravenfetch.protocols.smb import SmbDownloader
from ravenfetch.protocols.url import UrlDownloader

DOWNLOADERS: dict[TransferProtocol, type[Downloader]] = {
    TransferProtocol.SFTP: SftpDownloader,
    TransferProtocol.SMB: SmbDownloader,
    TransferProtocol.HTTP: HttpDownloader,
    TransferProtocol.URL: UrlDownloader,
    TransferProtocol.LOCAL: LocalDownloader,
}


def classify(url: str) -> TransferProtocol:
    """Return the highest-priority protocol that handles ``url``."""
    for protocol in TransferProtocol:
        if DOWNLOADERS[protocol].handles(url):
            return protocol
    return TransferProtocol.LOCAL


def get_downloader(
    protocol: TransferProtocol | str,
    credentials: Credentials | None = None,
) -> Downloader:
    """Instantiate the downloader for ``protocol`` with ``credentials``."""
    return DOWNLOADERS[TransferProtocol(protocol)](credentials)
