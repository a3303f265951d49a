"""Regex-driven version extraction from object keys.

An ``Extractor`` owns one compiled pattern. Keys are matched against the
whole pattern (as if anchored with ``^...$``); the version text comes from
the ``version`` named group when present, otherwise from the first group.
"""

import logging
import re
from typing import Iterable, List, Optional

from ..constants import Constants, VersionTypes
from ..errors import ConfigurationError, VersionParseError
from .models import Extraction
from .version import parse_version

logger = logging.getLogger(__name__)

# Characters that make a path section a regular expression rather than a literal
_SPECIAL_CHARS = r"\*.[](){}?|^$+"
_SPECIAL_CLASS = re.escape(_SPECIAL_CHARS)
_LITERAL_CHAR = re.compile(r"\\([" + _SPECIAL_CLASS + r"])|([^" + _SPECIAL_CLASS + r"])")
_LITERAL_SECTION = re.compile(r"^(?:\\[" + _SPECIAL_CLASS + r"]|[^" + _SPECIAL_CLASS + r"])*$")


def prefix_hint(pattern: str) -> str:
    """Return the literal directory prefix of ``pattern`` usable as a listing prefix.

    Leading sections without regex metacharacters are kept (escaped
    metacharacters are unescaped); the final section never contributes since
    it names the object rather than a directory, e.g. ``files/v1\\.0/abc-(.*).tgz``
    lists under ``files/v1.0/``.
    """
    if pattern.startswith("^"):
        pattern = pattern[1:]
    sections = pattern.split("/")[:-1]
    literal = []
    for section in sections:
        if not _LITERAL_SECTION.match(section):
            break
        literal.append(_LITERAL_CHAR.sub(lambda m: m.group(1) or m.group(2), section))
    if not literal:
        return ""
    return "/".join(literal) + "/"


class Extractor:
    """Compiled pattern plus the rules for turning a match into an Extraction."""

    def __init__(self, pattern: str, version_type: VersionTypes = VersionTypes.SEMVER):
        """Compile ``pattern``.

        Raises:
            ConfigurationError: the pattern does not compile or has no capturing group.
        """
        try:
            self.regex = re.compile(pattern)
        except re.error as e:
            raise ConfigurationError(f"invalid regexp {pattern!r}: {e}") from e
        if self.regex.groups < 1:
            raise ConfigurationError(f"{Constants.ERR_NO_CAPTURE_GROUP}: {pattern!r}")
        self.pattern = pattern
        self.version_type = version_type

    def matches(self, key: str) -> bool:
        return self.regex.fullmatch(key) is not None

    def match_keys(self, keys: Iterable[str]) -> List[str]:
        """Filter ``keys`` down to the ones the whole pattern matches."""
        return [k for k in keys if self.matches(k)]

    def extract(self, key: str) -> Optional[Extraction]:
        """Extract the version from ``key``.

        Returns None when the key does not match or the version group did not
        participate in the match.

        Raises:
            VersionParseError: the key matched but the captured text is not a version.
        """
        m = self.regex.fullmatch(key or "")
        if m is None:
            return None

        if Constants.VERSION_GROUP in self.regex.groupindex:
            raw = m.group(Constants.VERSION_GROUP)
        else:
            raw = m.group(1)
        if raw is None:
            return None

        commits = 0
        if Constants.COMMITS_SINCE_VERSION_GROUP in self.regex.groupindex:
            commits_raw = m.group(Constants.COMMITS_SINCE_VERSION_GROUP)
            if commits_raw:
                if not commits_raw.isdecimal():
                    raise VersionParseError(commits_raw, "commits_since_version group was not a number")
                commits = int(commits_raw)

        version = parse_version(raw, self.version_type)
        logger.debug("Extracted version %s from %s", version, key)
        return Extraction(key=key, version=version, raw=raw, commits_since_version=commits)

    def extract_all(self, keys: Iterable[str]) -> List[Extraction]:
        """Extract every matching key, sorted ascending by version."""
        extractions = []
        for key in self.match_keys(keys):
            extraction = self.extract(key)
            if extraction is not None:
                extractions.append(extraction)
        extractions.sort(key=lambda e: e.sort_key)
        return extractions
