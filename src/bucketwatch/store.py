"""Object store collaborators consumed by the resolver.

The resolver only needs two listing calls. Any client exposing them (an S3
SDK wrapper, a test double) can be passed in; ``SnapshotObjectStore`` serves
a static catalog from memory or from a YAML snapshot file.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Protocol, Sequence

import yaml

from .errors import BackendError

logger = logging.getLogger(__name__)


class ObjectStore(Protocol):
    """Listing operations the resolver relies on."""

    def list_keys(self, bucket: str, prefix: str) -> Sequence[str]:
        """Return every key in ``bucket`` starting with ``prefix``, in any order."""

    def list_object_versions(self, bucket: str, key: str) -> Sequence[str]:
        """Return the version ids of ``key``, newest first."""


class SnapshotObjectStore:
    """In-memory store built from a fixed snapshot of buckets.

    Snapshot shape::

        buckets:
          my-bucket:
            keys: [files/abc-1.0.tgz, ...]
            versions:
              files/versioned-file: [v3, v2, v1]   # newest first
    """

    def __init__(self, buckets: Optional[Mapping[str, Mapping]] = None):
        self._buckets: Dict[str, Dict[str, object]] = {}
        for name, content in (buckets or {}).items():
            content = content or {}
            self._buckets[name] = {
                "keys": [str(k) for k in content.get("keys") or []],
                "versions": {
                    str(k): [str(v) for v in (ids or [])]
                    for k, ids in (content.get("versions") or {}).items()
                },
            }

    @classmethod
    def from_file(cls, path: str) -> "SnapshotObjectStore":
        """Load a snapshot from a YAML (or JSON) file."""
        try:
            with open(path, encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as e:
            raise BackendError(f"could not read snapshot {path}: {e}") from e
        if not isinstance(data, dict) or not isinstance(data.get("buckets", {}), dict):
            raise BackendError(f"snapshot {path} must contain a 'buckets' mapping")
        return cls(data.get("buckets"))

    def _bucket(self, bucket: str) -> Dict[str, object]:
        try:
            return self._buckets[bucket]
        except KeyError:
            raise BackendError(f"NoSuchBucket: {bucket}") from None

    def list_keys(self, bucket: str, prefix: str) -> List[str]:
        keys = self._bucket(bucket)["keys"]
        found = [k for k in keys if k.startswith(prefix or "")]  # type: ignore[union-attr]
        logger.debug("Listed %d keys in %s under %r", len(found), bucket, prefix)
        return found

    def list_object_versions(self, bucket: str, key: str) -> List[str]:
        versions = self._bucket(bucket)["versions"]
        return list(versions.get(key, []))  # type: ignore[union-attr]
