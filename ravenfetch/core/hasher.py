"""Canonical hashing helpers for resolver identity and configuration hashes.

Every id is the SHA-256 of the canonical JSON form of a declaration's
defining inputs, so the same inputs always land in the same cache directory
across sessions and machines.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable
from pathlib import PurePath
from typing import Any

from pydantic import SecretStr


def _canonical_default(obj: Any) -> Any:
    """Serialize the few non-JSON types that appear in identity inputs."""
    if isinstance(obj, PurePath):
        return obj.as_posix()
    if isinstance(obj, SecretStr):
        return obj.get_secret_value()
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    raise TypeError(f"Identity input of type {type(obj).__name__} is not hashable")


def canonical_json_bytes(obj: Any) -> bytes:
    """Produce canonical JSON bytes — deterministic, sorted, compact.

    - sorted keys
    - no whitespace separators (",", ":")
    - ensure_ascii=True
    - UTF-8 encoding
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=True,
        default=_canonical_default,
    ).encode("utf-8")


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def stable_hash(identity: Any) -> str:
    """Hash a single value or an ordered composite of values.

    Tuples and lists are folded in order, so ``("u", None)`` and
    ``(None, "u")`` produce different ids.
    """
    if isinstance(identity, tuple):
        identity = list(identity)
    return sha256_hex(canonical_json_bytes(identity))


def configuration_hash(ids: Iterable[str]) -> str:
    """SHA-256 over the ordered sequence of resolver ids."""
    return sha256_hex(canonical_json_bytes(list(ids)))
