"""Ravenfetch: cached artifact resolution for build tooling.

Resolves artifact declarations (SFTP, SMB, HTTP, generic URLs, or local
paths) into local files exactly once per identity:

  - Content-addressed cache: <download_root>/<sha256 of inputs>/<file>
  - Lock markers tell complete downloads from partial ones; partial
    leftovers are deleted and fetched again
  - Group labels for selective, bucketed resolution
  - Configuration hash for external incremental-build invalidation
"""

__version__ = "0.1.0"
__description__ = "Cached artifact resolution over SFTP, SMB, HTTP and local paths"

from ravenfetch.core.registry import FileResolver, ResolutionError, TaskIO
from ravenfetch.protocols import DownloadError, TransferProtocol

__all__ = [
    "FileResolver",
    "ResolutionError",
    "DownloadError",
    "TaskIO",
    "TransferProtocol",
    "__version__",
]
