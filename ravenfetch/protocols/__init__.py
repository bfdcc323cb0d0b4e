"""Transfer protocols: the downloader contract, implementations and dispatch.

Every downloader exposes a pure ``handles(url)`` predicate and a
``download(url, destination)`` method that raises ``DownloadError`` on
failure.  ``classify`` picks the protocol for a location; ``get_downloader``
builds the matching implementation.
"""

from ravenfetch.protocols.base import (
    DownloadError,
    Downloader,
    TransferProtocol,
    file_name,
)
from ravenfetch.protocols.dispatcher import DOWNLOADERS, classify, get_downloader

__all__ = [
    "DOWNLOADERS",
    "DownloadError",
    "Downloader",
    "TransferProtocol",
    "classify",
    "file_name",
    "get_downloader",
]
