"""Resolver manifest — a TOML file declaring artifacts to resolve.

Example::

    download_root = ".ravenfetch/downloads"

    [properties]
    "http.username" = "deployer"

    [[artifacts]]
    url = "https://repo.example/app.zip"

    [[artifacts]]
    url = "sftp://files.example/drops/content.zip"
    group = "content"
    host_checking = false
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ravenfetch.models.resolver import GROUP_DEFAULT
from ravenfetch.protocols.base import TransferProtocol


class ManifestError(ValueError):
    """Raised when a manifest cannot be read or fails validation."""


class ArtifactDeclaration(BaseModel):
    """One ``[[artifacts]]`` entry.

    ``protocol`` forces a downloader; when omitted the location is
    classified by protocol dispatch.  Credential fields left unset default
    from the property source.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str
    group: str = GROUP_DEFAULT
    protocol: TransferProtocol | None = None
    username: str | None = None
    password: str | None = None
    domain: str | None = None
    host_checking: bool | None = None
    ignore_certificate_validation: bool | None = None


class ResolverManifest(BaseModel):
    """Top-level manifest document."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    download_root: Path | None = None
    properties: dict[str, str] = {}
    artifacts: list[ArtifactDeclaration] = []

    @field_validator("properties", mode="before")
    @classmethod
    def _stringify_booleans(cls, value: object) -> object:
        """Accept TOML booleans for toggles such as ``http.ignoreCertificateValidation``."""
        if not isinstance(value, dict):
            return value
        return {
            key: str(item).lower() if isinstance(item, bool) else item
            for key, item in value.items()
        }

    @classmethod
    def load(cls, path: Path) -> ResolverManifest:
        """Parse and validate a manifest file.

        Relative ``download_root`` values are taken relative to the
        manifest's directory.
        """
        path = Path(path)
        try:
            with path.open("rb") as handle:
                data = tomllib.load(handle)
            manifest = cls.model_validate(data)
        except (OSError, tomllib.TOMLDecodeError, ValidationError) as exc:
            raise ManifestError(f"Invalid manifest {path}: {exc}") from exc

        if manifest.download_root is not None and not manifest.download_root.is_absolute():
            manifest = manifest.model_copy(
                update={"download_root": path.parent / manifest.download_root}
            )
        return manifest
