"""Build a ``FileResolver`` from settings and a manifest."""

from __future__ import annotations

import logging
from pathlib import Path

from ravenfetch.config import ResolverSettings
from ravenfetch.core.registry import FileResolver
from ravenfetch.models.manifest import ResolverManifest

logger = logging.getLogger(__name__)


def build_resolver(
    manifest: ResolverManifest,
    settings: ResolverSettings | None = None,
    *,
    base_dir: Path | None = None,
) -> FileResolver:
    """Register every manifest artifact, in file order, on a new resolver.

    The manifest's ``download_root`` and ``properties`` take precedence over
    the settings. Relative local paths resolve against ``settings.base_dir``,
    then ``base_dir``, then the working directory.
    """
    settings = settings or ResolverSettings()
    resolver = FileResolver(
        manifest.download_root or settings.download_root,
        properties=settings.property_source().merged(manifest.properties),
        base_dir=settings.base_dir or base_dir,
    )

    for artifact in manifest.artifacts:
        with resolver.group(artifact.group) as scoped:
            scoped.download(
                artifact.url,
                protocol=artifact.protocol,
                username=artifact.username,
                password=artifact.password,
                domain=artifact.domain,
                host_checking=artifact.host_checking,
                ignore_certificate_validation=artifact.ignore_certificate_validation,
            )

    logger.info(
        "Loaded %d artifact declaration(s) into %s",
        len(manifest.artifacts),
        resolver.download_dir,
    )
    return resolver
