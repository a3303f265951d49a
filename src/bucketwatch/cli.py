"""Console entry point: check request on stdin, new versions on stdout."""

import json
import logging
import sys
from typing import IO, Optional

from .args import parse_args
from .config import CheckRequest, load_source_file
from .constants import ExitCodes
from .errors import BackendError, ConfigurationError, VersionParseError
from .logging_utils import configure_logging, is_debug_enabled
from .store import SnapshotObjectStore
from .versioning.resolver import VersionResolver

logger = logging.getLogger(__name__)


def _read_request(path: Optional[str], stdin: IO[str]):
    try:
        if path:
            with open(path, encoding="utf-8") as fh:
                return json.load(fh)
        return json.load(stdin)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"reading request: {e}") from e


def main(argv=None, stdin: Optional[IO[str]] = None, stdout: Optional[IO[str]] = None) -> int:
    """Run a check and return the process exit code."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL, args.LOG_FILE)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    try:
        defaults = load_source_file(args.SOURCE_FILE) if args.SOURCE_FILE else None
        request = CheckRequest.from_dict(_read_request(args.INPUT, stdin), defaults)
        request.source.validate()
        store = SnapshotObjectStore.from_file(args.SNAPSHOT)
        versions = VersionResolver(store).check(request)
    except ConfigurationError as e:
        logger.error("invalid configuration: %s", e)
        return ExitCodes.CONFIGURATION_ERROR.value
    except VersionParseError as e:
        logger.error("extracting versions: %s", e)
        return ExitCodes.PARSE_ERROR.value
    except BackendError as e:
        logger.error("listing versions: %s", e)
        return ExitCodes.BACKEND_ERROR.value

    response = [v.to_dict() for v in versions]
    if is_debug_enabled(logger):
        logger.debug("Reporting %d new versions", len(response))
    json.dump(response, stdout)
    stdout.write("\n")
    return ExitCodes.SUCCESS.value


def run() -> None:
    """Console script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    run()
