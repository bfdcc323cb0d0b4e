"""File resolver registry — ordered resolver declarations and resolution passes.

Callers register declarations once per configuration session, then ask for
resolved files, either flat (``all_files``) or bucketed by group
(``grouped_files``).  Every call is a fresh resolution pass: nothing is
memoized in memory, and the on-disk lock markers are the only cross-call
cache.

Groups are threaded explicitly.  ``group(name)`` yields a view of the same
registry whose registrations carry ``name``; there is no shared "current
group" to save and restore.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Protocol, TypeVar, runtime_checkable

from ravenfetch.core.cache import DOWNLOAD_LOCK
from ravenfetch.core.coordinator import DownloadCoordinator
from ravenfetch.core.hasher import configuration_hash, stable_hash
from ravenfetch.core.properties import PropertySource
from ravenfetch.models.resolver import GROUP_DEFAULT, Resolution, ResolverSpec
from ravenfetch.protocols import TransferProtocol, classify, file_name, get_downloader
from ravenfetch.protocols.base import redact

logger = logging.getLogger(__name__)

GroupFilter = Callable[[str], bool]
T = TypeVar("T")


class ResolutionError(RuntimeError):
    """Raised when a retrieval function returns without producing its file."""


@runtime_checkable
class TaskIO(Protocol):
    """Incremental-build task that can declare outputs and inputs.

    ``declare_input`` receives a zero-argument provider so the task can
    evaluate the value when it fingerprints, after all registration is done.
    """

    def declare_output_dir(self, path: Path) -> None:
        ...

    def declare_input(self, name: str, provider: Callable[[], Any]) -> None:
        ...


def _accept_all(group: str) -> bool:
    return True


class FileResolver:
    """Ordered collection of resolver declarations backed by a download cache.

    Parameters
    ----------
    download_dir:
        Root under which every cache directory ``<download_dir>/<id>`` lives.
    properties:
        Credential defaults (``<protocol>.username`` etc.).  A plain mapping
        is wrapped in a ``PropertySource``.
    base_dir:
        Directory that relative ``local()`` paths resolve against.
        Defaults to the current working directory.
    coordinator:
        Caching strategy; override in tests.

    Examples
    --------
    >>> resolver = FileResolver(Path("/tmp/downloads"))
    >>> resolver.local("/tmp/a.zip")  # doctest: +SKIP
    >>> with resolver.group("extra") as extra:
    ...     extra.url("https://repo.example/b.zip")  # doctest: +SKIP
    >>> resolver.grouped_files()  # doctest: +SKIP
    """

    GROUP_DEFAULT = GROUP_DEFAULT
    DOWNLOAD_LOCK = DOWNLOAD_LOCK

    def __init__(
        self,
        download_dir: Path,
        *,
        properties: PropertySource | Mapping[str, str] | None = None,
        base_dir: Path | None = None,
        coordinator: DownloadCoordinator | None = None,
    ) -> None:
        self.download_dir = Path(download_dir)
        if isinstance(properties, PropertySource):
            self.properties = properties
        else:
            self.properties = PropertySource(properties)
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()
        self.coordinator = coordinator or DownloadCoordinator()
        self._resolvers: list[ResolverSpec] = []
        self._group = GROUP_DEFAULT

    # ------------------------------------------------------------------
    # Configuration identity
    # ------------------------------------------------------------------

    @property
    def group_name(self) -> str:
        """Group that registrations through this view are tagged with."""
        return self._group

    @property
    def configured(self) -> bool:
        """Whether at least one resolver is registered."""
        return bool(self._resolvers)

    @property
    def specs(self) -> list[ResolverSpec]:
        """Return a copy of the registered specs in registration order."""
        return list(self._resolvers)

    def configuration_hash(self) -> str:
        """Aggregate hash over all registered ids, in registration order."""
        return configuration_hash(spec.id for spec in self._resolvers)

    def declare_as_task_io(self, task: TaskIO, property_name: str = "fileResolver") -> None:
        """Declare the download root as an output and the hash as an input."""
        task.declare_output_dir(self.download_dir)
        task.declare_input(property_name, self.configuration_hash)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def all_files(self, group_filter: GroupFilter | None = None) -> list[Path]:
        """Resolve every spec accepted by ``group_filter``, in registration order."""
        return [resolution.file for resolution in self._resolve_files(group_filter)]

    def grouped_files(self, group_filter: GroupFilter | None = None) -> dict[str, list[Path]]:
        """Resolve like ``all_files`` and bucket the results by group.

        Buckets appear in first-seen group order; files inside a bucket keep
        registration order.
        """
        files: dict[str, list[Path]] = {}
        for resolution in self._resolve_files(group_filter):
            files.setdefault(resolution.spec.group, []).append(resolution.file)
        return files

    def _resolve_files(self, group_filter: GroupFilter | None) -> list[Resolution]:
        accept = group_filter or _accept_all
        resolutions: list[Resolution] = []
        for spec in self._resolvers:
            if not accept(spec.group):
                continue
            file = Path(spec.retrieve(self.download_dir / spec.id))
            if not file.exists():
                raise ResolutionError(
                    f"Cannot resolve file from group '{spec.group}': {file.name}"
                )
            resolutions.append(Resolution(spec=spec, file=file))

        logger.debug("Resolved %d of %d file(s)", len(resolutions), len(self._resolvers))
        return resolutions

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        identity: Any,
        retrieve: Callable[[Path], Path],
        *,
        group: str | None = None,
    ) -> str:
        """Register a retrieval function under the hash of ``identity``.

        ``identity`` is a single value or an ordered tuple of every input
        that can change the fetched artifact, credentials included.
        """
        spec = ResolverSpec(
            id=stable_hash(identity),
            group=group if group is not None else self._group,
            retrieve=retrieve,
        )
        self._resolvers.append(spec)
        logger.debug("Registered resolver %s in group '%s'", spec.id, spec.group)
        return spec.id

    @contextmanager
    def group(self, name: str) -> Iterator[FileResolver]:
        """Yield a view whose registrations are tagged with group ``name``.

        The view shares this registry's specs.  Registrations made through
        the parent registry inside the block keep their own group.
        """
        view = copy.copy(self)
        view._group = name
        yield view

    def with_group(self, name: str, body: Callable[[FileResolver], T]) -> T:
        """Call ``body`` with a view scoped to group ``name``."""
        with self.group(name) as scoped:
            return body(scoped)

    def url(self, url: str) -> str:
        """Register ``url`` with the downloader picked by protocol dispatch."""
        return self.download(url)

    def download(
        self,
        url: str,
        *,
        protocol: TransferProtocol | str | None = None,
        username: str | None = None,
        password: str | None = None,
        domain: str | None = None,
        host_checking: bool | None = None,
        ignore_certificate_validation: bool | None = None,
    ) -> str:
        """Register a cached download of ``url``.

        Credentials not given explicitly default from the property source
        for the chosen protocol.  The resolved username, password and domain
        are part of the id, so changing them yields a new cache directory.
        """
        protocol = TransferProtocol(protocol) if protocol else classify(url)
        if protocol is TransferProtocol.LOCAL:
            return self.local(url)

        file_name(url)
        credentials = self.properties.credentials(
            protocol,
            username=username,
            password=password,
            domain=domain,
            host_checking=host_checking,
            ignore_certificate_validation=ignore_certificate_validation,
        )
        downloader = get_downloader(protocol, credentials)
        identity = url if credentials.anonymous else (url, *credentials.identity_fields())

        def retrieve(target_dir: Path) -> Path:
            return self.coordinator.materialize(
                url, target_dir, lambda file: downloader.download(url, file)
            )

        logger.debug("Declared %s download of %s", protocol.value, redact(url))
        return self.register(identity, retrieve)

    def download_sftp(
        self,
        url: str,
        *,
        username: str | None = None,
        password: str | None = None,
        host_checking: bool | None = None,
    ) -> str:
        return self.download(
            url,
            protocol=TransferProtocol.SFTP,
            username=username,
            password=password,
            host_checking=host_checking,
        )

    def download_smb(
        self,
        url: str,
        *,
        domain: str | None = None,
        username: str | None = None,
        password: str | None = None,
    ) -> str:
        return self.download(
            url,
            protocol=TransferProtocol.SMB,
            domain=domain,
            username=username,
            password=password,
        )

    def download_http(
        self,
        url: str,
        *,
        username: str | None = None,
        password: str | None = None,
        ignore_certificate_validation: bool | None = None,
    ) -> str:
        return self.download(
            url,
            protocol=TransferProtocol.HTTP,
            username=username,
            password=password,
            ignore_certificate_validation=ignore_certificate_validation,
        )

    def download_url(self, url: str) -> str:
        return self.download(url, protocol=TransferProtocol.URL)

    def local(self, path: str | Path) -> str:
        """Register a local file as-is; no caching, the source is the result."""
        source = Path(path).expanduser()
        if not source.is_absolute():
            source = self.base_dir / source
        source = source.absolute()
        return self.register(str(source), lambda target_dir: source)
