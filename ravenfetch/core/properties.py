"""Property source — string-keyed overrides for downloader credentials.

Keys follow ``<protocol>.<field>``:

* ``<protocol>.username``
* ``<protocol>.password``
* ``<protocol>.domain``
* ``<protocol>.hostChecking`` (default ``true``)
* ``<protocol>.ignoreCertificateValidation`` (default ``true``)

A property is only consulted when the matching value was not passed
explicitly at registration time.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from ravenfetch.models.credentials import Credentials
from ravenfetch.protocols.base import TransferProtocol

TRUE_VALUES: frozenset[str] = frozenset({"true", "yes", "on", "y", "t", "1"})


def to_bool(value: str | None, default: bool) -> bool:
    """Lenient boolean parsing; ``None`` yields ``default``."""
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java-style ``key=value`` / ``key: value`` lines.

    Blank lines and lines starting with ``#`` or ``!`` are skipped.
    Continuation lines and unicode escapes are not supported.
    """
    values: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line[0] in "#!":
            continue
        separators = [i for i in (line.find("="), line.find(":")) if i >= 0]
        if not separators:
            values[line] = ""
            continue
        cut = min(separators)
        values[line[:cut].strip()] = line[cut + 1:].strip()
    return values


class PropertySource:
    """Immutable view over string properties.

    Parameters
    ----------
    values:
        Initial key/value pairs.  Copied on construction.
    """

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    @classmethod
    def from_file(cls, path: Path) -> PropertySource:
        """Load a ``.properties`` file."""
        return cls(parse_properties(Path(path).read_text(encoding="utf-8")))

    def merged(self, overrides: Mapping[str, str]) -> PropertySource:
        """Return a new source where ``overrides`` win over existing keys."""
        return PropertySource({**self._values, **overrides})

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._values.get(key, default)

    def get_bool(self, key: str, default: bool) -> bool:
        return to_bool(self._values.get(key), default)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def credentials(
        self,
        protocol: TransferProtocol | str,
        *,
        username: str | None = None,
        password: str | None = None,
        domain: str | None = None,
        host_checking: bool | None = None,
        ignore_certificate_validation: bool | None = None,
    ) -> Credentials:
        """Build credentials for ``protocol``, filling gaps from properties."""
        prefix = TransferProtocol(protocol).value
        if password is None:
            password = self.get(f"{prefix}.password")
        return Credentials(
            username=username if username is not None else self.get(f"{prefix}.username"),
            password=password,
            domain=domain if domain is not None else self.get(f"{prefix}.domain"),
            host_checking=(
                host_checking
                if host_checking is not None
                else self.get_bool(f"{prefix}.hostChecking", True)
            ),
            ignore_certificate_validation=(
                ignore_certificate_validation
                if ignore_certificate_validation is not None
                else self.get_bool(f"{prefix}.ignoreCertificateValidation", True)
            ),
        )
