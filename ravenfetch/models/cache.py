"""Cache-state models: the lock marker and cache directory listings."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class LockMarker(BaseModel):
    """Completion marker written next to a fetched artifact.

    Serialized as ``{"downloaded": "<ISO-8601>"}``.  Its presence is the only
    evidence that the artifact in the same directory is complete.
    """

    model_config = ConfigDict(frozen=True)

    downloaded: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


class CacheEntry(BaseModel):
    """One ``<download_root>/<id>`` directory as seen on disk."""

    model_config = ConfigDict(frozen=True)

    id: str
    directory: Path
    files: list[str] = []
    downloaded: datetime | None = None

    @property
    def complete(self) -> bool:
        """Whether a lock marker vouches for the files in this entry."""
        return self.downloaded is not None
