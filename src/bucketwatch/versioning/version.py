"""Comparable version values parsed from object keys.

Two kinds are supported:

- ``VersionValue``: dot-separated numeric segments of any length with an
  optional ``-prerelease`` and ``+build`` suffix (``105``, ``1.0.5``,
  ``1.0.6.1-rc7``). Missing trailing segments compare as zero and
  pre-release precedence follows SemVer 2.0 via ``semantic_version``.
- ``StringVersion``: the captured text itself, compared lexically.
"""

import re
from functools import total_ordering
from typing import Optional, Tuple, Union

import semantic_version

from ..constants import VersionTypes
from ..errors import VersionParseError

_IDENTIFIERS = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"

VERSION_RE = re.compile(
    r"^v?(?P<release>\d+(?:\.\d+)*)"
    r"(?:-(?P<prerelease>" + _IDENTIFIERS + r"))?"
    r"(?:\+(?P<build>" + _IDENTIFIERS + r"))?$"
)


def _strip_trailing_zeros(segments: Tuple[int, ...]) -> Tuple[int, ...]:
    end = len(segments)
    while end > 1 and segments[end - 1] == 0:
        end -= 1
    return segments[:end]


@total_ordering
class VersionValue:
    """Immutable, totally ordered version with an arbitrary segment count."""

    __slots__ = ("_release", "_prerelease", "_build", "_pre_key")

    def __init__(self, release: Tuple[int, ...], prerelease: Optional[str] = None, build: Optional[str] = None):
        if not release:
            raise ValueError("a version needs at least one numeric segment")
        object.__setattr__(self, "_release", tuple(int(s) for s in release))
        object.__setattr__(self, "_prerelease", prerelease or None)
        object.__setattr__(self, "_build", build or None)
        # semantic_version owns identifier precedence; only the prerelease
        # part of this placeholder ever differs between two values.
        pre_key = semantic_version.Version("0.0.0-" + prerelease) if prerelease else None
        object.__setattr__(self, "_pre_key", pre_key)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def parse(cls, text: str) -> "VersionValue":
        """Parse ``text`` or raise VersionParseError."""
        m = VERSION_RE.match(text or "")
        if not m:
            raise VersionParseError(text, "expected N[.N...][-prerelease][+build]")
        release = tuple(int(s) for s in m.group("release").split("."))
        try:
            return cls(release, m.group("prerelease"), m.group("build"))
        except ValueError as e:
            raise VersionParseError(text, str(e)) from e

    @property
    def release(self) -> Tuple[int, ...]:
        return self._release

    @property
    def prerelease(self) -> Optional[str]:
        return self._prerelease

    @property
    def build(self) -> Optional[str]:
        return self._build

    def compare(self, other: "VersionValue") -> int:
        """Return -1, 0 or 1 as self is lower than, equal to or greater than other."""
        width = max(len(self._release), len(other._release))
        left = self._release + (0,) * (width - len(self._release))
        right = other._release + (0,) * (width - len(other._release))
        if left != right:
            return -1 if left < right else 1

        if self._pre_key is None and other._pre_key is None:
            return 0
        # A release outranks any of its pre-releases
        if self._pre_key is None:
            return 1
        if other._pre_key is None:
            return -1
        if self._pre_key == other._pre_key:
            return 0
        return -1 if self._pre_key < other._pre_key else 1

    def __eq__(self, other):
        if not isinstance(other, VersionValue):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other):
        if not isinstance(other, VersionValue):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self):
        pre = self._pre_key.prerelease if self._pre_key is not None else None
        return hash((_strip_trailing_zeros(self._release), pre))

    def __str__(self):
        text = ".".join(str(s) for s in self._release)
        if self._prerelease:
            text += "-" + self._prerelease
        if self._build:
            text += "+" + self._build
        return text

    def __repr__(self):
        return f"VersionValue({str(self)!r})"


@total_ordering
class StringVersion:
    """Version compared by its raw text, e.g. date-stamped artifact names."""

    __slots__ = ("_text",)

    def __init__(self, text: str):
        object.__setattr__(self, "_text", text)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def compare(self, other: "StringVersion") -> int:
        if self._text == other._text:
            return 0
        return -1 if self._text < other._text else 1

    def __eq__(self, other):
        if not isinstance(other, StringVersion):
            return NotImplemented
        return self._text == other._text

    def __lt__(self, other):
        if not isinstance(other, StringVersion):
            return NotImplemented
        return self._text < other._text

    def __hash__(self):
        return hash(self._text)

    def __str__(self):
        return self._text

    def __repr__(self):
        return f"StringVersion({self._text!r})"


AnyVersion = Union[VersionValue, StringVersion]


def parse_version(text: str, version_type: VersionTypes = VersionTypes.SEMVER) -> AnyVersion:
    """Build the comparable value for ``text`` according to ``version_type``."""
    if version_type == VersionTypes.STRING:
        return StringVersion(text)
    return VersionValue.parse(text)
