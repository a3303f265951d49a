"""Argument parsing functionality for bucketwatch-check."""

import argparse

from .constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="bucketwatch-check",
        description=(
            "Read a check request on stdin and print the new versions found "
            "in the object store as JSON on stdout"
        ),
        add_help=True,
    )

    parser.add_argument("-s", "--snapshot",
                        dest="SNAPSHOT",
                        help="YAML snapshot of the object store to resolve against",
                        action="store",
                        type=str,
                        required=True)
    parser.add_argument("--source-file",
                        dest="SOURCE_FILE",
                        help="YAML file with default source fields; the request overrides them",
                        action="store",
                        type=str)
    parser.add_argument("-i", "--input",
                        dest="INPUT",
                        help="Read the request from a file instead of stdin",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS,
                        default=Constants.DEFAULT_LOG_LEVEL)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
