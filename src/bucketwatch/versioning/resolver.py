"""Compute the versions a check should report.

Given an addressing mode, a live catalog and the last known reference, the
resolver returns new versions oldest first:

- regexp, no usable reference: the latest matching key only
- regexp with a reference: every key whose version is >= the reference's
- versioned file, no known reference: the newest version id only
- versioned file with a known reference: the reference and everything newer
"""

import logging
from typing import List, Optional

from ..config import CheckRequest
from ..store import ObjectStore
from .catalog import addressing_mode_from_source, chronological_since, load_catalog, load_history
from .extractor import Extractor
from .models import AddressingMode, Extraction, NativeVersioning, Reference, RegexPath, ResolvedVersion

logger = logging.getLogger(__name__)


class VersionResolver:
    """Resolves new versions against one object store.

    Holds no state between calls; every call lists the store afresh.
    """

    def __init__(self, store: ObjectStore):
        self.store = store

    def check(self, request: CheckRequest) -> List[ResolvedVersion]:
        """Validate the request's source and resolve against its version."""
        mode = addressing_mode_from_source(request.source)
        return self.resolve(mode, request.version)

    def resolve(self, mode: AddressingMode, reference: Optional[Reference] = None) -> List[ResolvedVersion]:
        """Return new versions for ``mode`` since ``reference``, oldest first.

        Raises:
            ConfigurationError: the regexp cannot be compiled (no store call is made).
            VersionParseError: a matched key carries an invalid version.
            BackendError: propagated from the store.
        """
        if isinstance(mode, RegexPath):
            return self._resolve_regex(mode, reference)
        if isinstance(mode, NativeVersioning):
            return self._resolve_versioned_file(mode, reference)
        raise TypeError(f"unsupported addressing mode: {type(mode).__name__}")

    def _resolve_regex(self, mode: RegexPath, reference: Optional[Reference]) -> List[ResolvedVersion]:
        extractor = Extractor(mode.pattern, mode.version_type)
        extractions = load_catalog(self.store, mode, extractor)
        if not extractions:
            logger.debug("No keys match %s", mode.pattern)
            return []

        last = extractor.extract(reference.path) if reference and reference.path else None
        if last is None:
            if reference and reference.path:
                logger.debug("Reference %s does not match %s, reporting latest", reference.path, mode.pattern)
            return [_path_version(extractions[-1])]

        return [_path_version(e) for e in extractions if e.version.compare(last.version) >= 0]  # type: ignore[arg-type]

    def _resolve_versioned_file(
        self, mode: NativeVersioning, reference: Optional[Reference]
    ) -> List[ResolvedVersion]:
        history = load_history(self.store, mode)
        if not history:
            return []

        if reference and reference.version_id:
            since = chronological_since(history, reference.version_id)
            if since:
                return [ResolvedVersion(version_id=v) for v in since]
            logger.info("Version %s of %s no longer exists, reporting newest", reference.version_id, mode.key)
        return [ResolvedVersion(version_id=history[0])]


def _path_version(extraction: Extraction) -> ResolvedVersion:
    return ResolvedVersion(path=extraction.key)
