"""Data models for version extraction and resolution."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from ..constants import VersionTypes
from .version import AnyVersion


@dataclass(frozen=True)
class Extraction:
    """An object key paired with the version found in it."""
    key: str
    version: AnyVersion
    raw: str  # the captured substring, before parsing
    commits_since_version: int = 0

    @property
    def sort_key(self) -> Tuple[AnyVersion, int]:
        """Ordering used for catalogs: version first, then git-describe distance."""
        return (self.version, self.commits_since_version)


@dataclass(frozen=True)
class RegexPath:
    """Versions are distinct keys whose names match ``pattern``."""
    bucket: str
    pattern: str
    initial_path: Optional[str] = None
    version_type: VersionTypes = VersionTypes.SEMVER


@dataclass(frozen=True)
class NativeVersioning:
    """Versions are the store's own version history of a single key."""
    bucket: str
    key: str
    initial_version: Optional[str] = None


# Exactly one addressing mode is active for a source.
AddressingMode = Union[RegexPath, NativeVersioning]


@dataclass(frozen=True)
class Reference:
    """The orchestrator's last known version, if any."""
    path: Optional[str] = None
    version_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["Reference"]:
        """Build a Reference from the request's ``version`` object; None when empty."""
        if not data:
            return None
        path = data.get("path") or None
        version_id = data.get("version_id") or None
        if path is None and version_id is None:
            return None
        return cls(path=path, version_id=version_id)


@dataclass(frozen=True)
class ResolvedVersion:
    """A single entry of the check response."""
    path: Optional[str] = None
    version_id: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Serialize, omitting unset fields."""
        out: Dict[str, str] = {}
        if self.path is not None:
            out["path"] = self.path
        if self.version_id is not None:
            out["version_id"] = self.version_id
        return out
