"""Downloader contract shared by every transfer protocol.

The protocol set is closed: ``TransferProtocol`` lists every supported
transport in dispatch priority order, and each member maps to exactly one
downloader class in ``ravenfetch.protocols.dispatcher``.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path, PureWindowsPath
from typing import ClassVar, Protocol, runtime_checkable
from urllib.parse import unquote, urlsplit, urlunsplit

DEFAULT_CHUNK_SIZE: int = 8192


class TransferProtocol(str, Enum):
    """Supported transports, declared in dispatch priority order.

    The value doubles as the property-source key prefix, e.g.
    ``sftp.username`` or ``http.ignoreCertificateValidation``.
    """

    SFTP = "sftp"
    SMB = "smb"
    HTTP = "http"
    URL = "url"
    LOCAL = "local"


class DownloadError(RuntimeError):
    """Raised when a protocol downloader fails to fetch an artifact.

    The underlying network, authentication or I/O exception is chained as
    ``__cause__``.
    """

    def __init__(self, url: str, cause: BaseException | str) -> None:
        self.url = redact(url)
        # Library errors often repeat the request URL verbatim
        reason = str(cause).replace(url, self.url)
        super().__init__(f"Cannot download '{self.url}': {reason}")


@runtime_checkable
class Downloader(Protocol):
    """Structural contract every protocol downloader satisfies.

    Attributes
    ----------
    protocol : TransferProtocol
        The enum member this downloader implements.
    """

    protocol: ClassVar[TransferProtocol]

    @staticmethod
    def handles(url: str) -> bool:
        """Return True if this downloader can fetch ``url``.  Must be pure."""
        ...

    def download(self, url: str, destination: Path) -> None:
        """Write the bytes behind ``url`` to ``destination``.

        Raises
        ------
        DownloadError
            On any network, authentication or local I/O failure.
        """
        ...


def has_scheme(url: str) -> bool:
    """Whether ``url`` carries a URI scheme (drive letters do not count)."""
    return len(urlsplit(url).scheme) > 1


def file_name(url: str) -> str:
    """Return the final path segment of a URL, UNC path or local path.

    Raises
    ------
    ValueError
        If the location ends with a separator or has no path at all.
    """
    if has_scheme(url):
        path = unquote(urlsplit(url).path)
        name = path.rsplit("/", 1)[-1]
    else:
        name = PureWindowsPath(url).name if "\\" in url else Path(url).name
    if not name:
        raise ValueError(f"Cannot derive a file name from '{redact(url)}'")
    return name


def redact(url: str) -> str:
    """Strip an inline password from a URL so it can be logged."""
    if not has_scheme(url):
        return url
    parts = urlsplit(url)
    if parts.password is None:
        return url
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    netloc = f"{parts.username}:***@{host}"
    return urlunsplit(parts._replace(netloc=netloc))
