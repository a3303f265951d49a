"""Version extraction, ordering and resolution."""

from .extractor import Extractor, prefix_hint
from .models import Extraction, NativeVersioning, Reference, RegexPath, ResolvedVersion
from .version import StringVersion, VersionValue, parse_version

__all__ = [
    "Extractor",
    "prefix_hint",
    "Extraction",
    "NativeVersioning",
    "Reference",
    "RegexPath",
    "ResolvedVersion",
    "StringVersion",
    "VersionValue",
    "parse_version",
]
