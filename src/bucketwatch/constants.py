"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    CONFIGURATION_ERROR = 1
    BACKEND_ERROR = 2
    PARSE_ERROR = 3


class VersionTypes(Enum):
    """How a captured version substring is compared.

    Args:
        Enum (string): Version types accepted in the source configuration.
    """

    SEMVER = "semver"
    STRING = "string"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    DEFAULT_LOG_LEVEL = "INFO"

    VERSION_GROUP = "version"
    COMMITS_SINCE_VERSION_GROUP = "commits_since_version"
    SUPPORTED_VERSION_TYPES = [
        VersionTypes.SEMVER.value,
        VersionTypes.STRING.value,
    ]
    DEFAULT_VERSION_TYPE = VersionTypes.SEMVER.value

    REDACTED = "redacted"
    SECRET_SOURCE_FIELDS = [
        "access_key_id",
        "secret_access_key",
        "session_token",
        "sse_kms_key_id",
    ]

    # Validation messages surfaced to the orchestrator verbatim
    ERR_BOTH_MODES = "please specify either regexp or versioned_file"
    ERR_NO_MODE = "please specify regexp or versioned_file"
    ERR_REGEXP_INITIAL_VERSION = "please use initial_path when regexp is set"
    ERR_VERSIONED_FILE_INITIAL_PATH = "please use initial_version when versioned_file is set"
    ERR_NO_CAPTURE_GROUP = "regexp must contain at least one capturing group"
    ERR_BOTH_INITIAL_CONTENTS = "please use initial_content_text or initial_content_binary but not both"
    ERR_INITIAL_CONTENT_WITHOUT_SEED = "please specify initial_version or initial_path if initial content is set"
