"""Exception types raised while resolving versions."""


class BucketwatchError(Exception):
    """Base class for all errors raised by bucketwatch."""


class ConfigurationError(BucketwatchError):
    """Raised when the source configuration cannot be used.

    Always raised before the object store is contacted.
    """


class VersionParseError(BucketwatchError):
    """Raised when a key matched the pattern but the captured text is not a version."""

    def __init__(self, text: str, reason: str):
        super().__init__(f"version number was not valid: {text!r}: {reason}")
        self.text = text
        self.reason = reason


class BackendError(BucketwatchError):
    """Raised by object store implementations when a listing call fails."""
