"""Ravenfetch data models — all Pydantic v2, all frozen (immutable)."""

from ravenfetch.models.cache import CacheEntry, LockMarker
from ravenfetch.models.credentials import Credentials
from ravenfetch.models.manifest import (
    ArtifactDeclaration,
    ManifestError,
    ResolverManifest,
)
from ravenfetch.models.resolver import GROUP_DEFAULT, Resolution, ResolverSpec

__all__ = [
    # resolver
    "GROUP_DEFAULT",
    "ResolverSpec",
    "Resolution",
    # credentials
    "Credentials",
    # cache
    "LockMarker",
    "CacheEntry",
    # manifest
    "ArtifactDeclaration",
    "ResolverManifest",
    "ManifestError",
]
