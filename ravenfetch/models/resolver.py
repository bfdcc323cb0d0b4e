"""Resolver declaration models (immutable)."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel, ConfigDict

GROUP_DEFAULT = "default"


class ResolverSpec(BaseModel):
    """A registered declaration of how to obtain one artifact.

    ``id`` is the stable hash of the declaration's defining inputs and also
    names the cache directory under the download root.  ``retrieve`` is
    called with ``<download_root>/<id>`` and returns the resolved file.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    group: str = GROUP_DEFAULT
    retrieve: Callable[[Path], Path]


class Resolution(BaseModel):
    """Transient pairing of a spec with the file one resolution pass produced."""

    model_config = ConfigDict(frozen=True)

    spec: ResolverSpec
    file: Path
