"""Translate a source configuration into the catalog shapes the resolver consumes.

Regex sources become a sorted list of Extractions built from a key listing;
versioned-file sources become the key's version history, newest first.
"""

import logging
from typing import List

from ..config import SourceConfig
from ..constants import VersionTypes
from ..store import ObjectStore
from .extractor import Extractor, prefix_hint
from .models import AddressingMode, Extraction, NativeVersioning, RegexPath

logger = logging.getLogger(__name__)


def addressing_mode_from_source(source: SourceConfig) -> AddressingMode:
    """Validate ``source`` and return its addressing mode.

    Raises:
        ConfigurationError: both or neither modes are set, a seed belongs to
            the other mode, or the pattern is unusable.
    """
    source.validate()
    if source.regexp:
        return RegexPath(
            bucket=source.bucket,
            pattern=source.regexp,
            initial_path=source.initial_path,
            version_type=VersionTypes(source.version_type),
        )
    return NativeVersioning(
        bucket=source.bucket,
        key=source.versioned_file,  # type: ignore[arg-type]
        initial_version=source.initial_version,
    )


def load_catalog(store: ObjectStore, mode: RegexPath, extractor: Extractor) -> List[Extraction]:
    """List the bucket and return matching extractions, sorted ascending.

    The configured seed is placed first when it matches the pattern and is
    not already a real key, so it never outranks real entries in the list.
    """
    prefix = prefix_hint(mode.pattern)
    keys = store.list_keys(mode.bucket, prefix)
    extractions = extractor.extract_all(keys)
    logger.debug(
        "Catalog for %s: %d of %d keys under %r matched", mode.bucket, len(extractions), len(keys), prefix
    )

    if mode.initial_path:
        seed = extractor.extract(mode.initial_path)
        if seed is None:
            logger.warning("initial_path %s does not match regexp, ignoring it", mode.initial_path)
        elif all(e.key != seed.key for e in extractions):
            extractions.insert(0, seed)
    return extractions


def load_history(store: ObjectStore, mode: NativeVersioning) -> List[str]:
    """Return the version ids of the versioned file, newest first.

    The configured initial version, when set and not already present, is
    treated as the oldest entry.
    """
    history = list(store.list_object_versions(mode.bucket, mode.key))
    logger.debug("History for %s/%s has %d versions", mode.bucket, mode.key, len(history))
    if mode.initial_version and mode.initial_version not in history:
        history.append(mode.initial_version)
    return history


def chronological_since(history: List[str], version_id: str) -> List[str]:
    """Return ids from ``version_id`` up to the newest, oldest first.

    ``history`` is newest first. An empty list means ``version_id`` is unknown.
    """
    try:
        index = history.index(version_id)
    except ValueError:
        return []
    return list(reversed(history[: index + 1]))
