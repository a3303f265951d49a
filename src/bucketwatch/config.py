"""Source configuration and check request parsing.

The orchestrator sends the whole resource source; only the fields that drive
version resolution are modelled here; the rest are kept untouched in
``SourceConfig.extra``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import yaml

from .constants import Constants, VersionTypes
from .errors import ConfigurationError
from .schema import CHECK_REQUEST_SCHEMA, validate_input
from .versioning.extractor import Extractor
from .versioning.models import Reference

logger = logging.getLogger(__name__)

_FIELDS = ("bucket", "regexp", "versioned_file", "initial_path", "initial_version", "version_type")


def redact_source(source: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``source`` safe to log."""
    redacted = dict(source)
    for name in Constants.SECRET_SOURCE_FIELDS:
        if redacted.get(name):
            redacted[name] = Constants.REDACTED
    return redacted


@dataclass
class SourceConfig:
    """Resolution-relevant part of the resource source."""
    bucket: str
    regexp: Optional[str] = None
    versioned_file: Optional[str] = None
    initial_path: Optional[str] = None
    initial_version: Optional[str] = None
    version_type: str = Constants.DEFAULT_VERSION_TYPE
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SourceConfig":
        """Build from a source mapping; empty strings count as unset."""
        known = {k: (data.get(k) or None) for k in _FIELDS}
        extra = {k: v for k, v in data.items() if k not in _FIELDS}
        return cls(
            bucket=known["bucket"] or "",
            regexp=known["regexp"],
            versioned_file=known["versioned_file"],
            initial_path=known["initial_path"],
            initial_version=known["initial_version"],
            version_type=known["version_type"] or Constants.DEFAULT_VERSION_TYPE,
            extra=extra,
        )

    def validate(self) -> None:
        """Check the source before any backend call.

        Raises:
            ConfigurationError: with the first rule the source violates.
        """
        if self.regexp and self.versioned_file:
            raise ConfigurationError(Constants.ERR_BOTH_MODES)
        if not self.regexp and not self.versioned_file:
            raise ConfigurationError(Constants.ERR_NO_MODE)
        if self.regexp and self.initial_version:
            raise ConfigurationError(Constants.ERR_REGEXP_INITIAL_VERSION)
        if self.versioned_file and self.initial_path:
            raise ConfigurationError(Constants.ERR_VERSIONED_FILE_INITIAL_PATH)
        content_text = self.extra.get("initial_content_text")
        content_binary = self.extra.get("initial_content_binary")
        if content_text and content_binary:
            raise ConfigurationError(Constants.ERR_BOTH_INITIAL_CONTENTS)
        if (content_text or content_binary) and not (self.initial_version or self.initial_path):
            raise ConfigurationError(Constants.ERR_INITIAL_CONTENT_WITHOUT_SEED)
        if self.version_type not in Constants.SUPPORTED_VERSION_TYPES:
            raise ConfigurationError(
                f"version_type must be one of {', '.join(Constants.SUPPORTED_VERSION_TYPES)}"
            )
        if self.regexp:
            # compiling is the check; resolution builds its own instance
            Extractor(self.regexp, VersionTypes(self.version_type))


@dataclass
class CheckRequest:
    """A parsed check request: source plus the last known version."""
    source: SourceConfig
    version: Optional[Reference] = None

    @classmethod
    def from_dict(cls, payload: Any, defaults: Optional[Mapping[str, Any]] = None) -> "CheckRequest":
        """Validate and parse a request payload.

        Args:
            payload: decoded JSON request.
            defaults: source fields used when the payload does not set them.

        Raises:
            ConfigurationError: the payload does not have the expected shape.
        """
        if defaults and isinstance(payload, dict) and isinstance(payload.get("source", {}), dict):
            merged = dict(defaults)
            merged.update(payload.get("source") or {})
            payload = dict(payload, source=merged)
        validate_input(CHECK_REQUEST_SCHEMA, payload)
        logger.debug("Check request source: %s", redact_source(payload["source"]))
        return cls(
            source=SourceConfig.from_dict(payload["source"]),
            version=Reference.from_dict(payload.get("version")),
        )


def load_source_file(path: str) -> Dict[str, Any]:
    """Load source defaults from a YAML file.

    Raises:
        ConfigurationError: the file is unreadable or not a mapping.
    """
    try:
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"could not load source file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"source file {path} must contain a mapping")
    # accept either a bare source mapping or one nested under "source"
    if isinstance(data.get("source"), dict):
        data = data["source"]
    return data
