"""
Argument parsing functions for the gqlclient CLI.
"""

import argparse
from pathlib import Path

from .. import __version__


def add_endpoint_arguments(parser: argparse.ArgumentParser) -> None:
    """Add endpoint and query source arguments."""
    parser.add_argument(
        "endpoint",
        nargs="?",
        help="GraphQL endpoint URL (default: client.endpoint from the config)",
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("-q", "--query", help="GraphQL document to send")
    source.add_argument(
        "-f", "--query-file", type=Path, help="File containing the GraphQL document"
    )


def add_request_arguments(parser: argparse.ArgumentParser) -> None:
    """Add variables, headers and timeout arguments."""
    parser.add_argument(
        "--var",
        action="append",
        dest="vars",
        metavar="NAME=VALUE",
        help="Variable; VALUE is parsed as JSON, or taken as a string (repeatable)",
    )

    parser.add_argument(
        "--variables",
        type=Path,
        help="JSON file with a variables object (--var entries override it)",
    )

    parser.add_argument(
        "-H",
        "--header",
        action="append",
        dest="headers",
        metavar="'NAME: VALUE'",
        help="Request header (repeatable)",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        help="Deadline for the whole call in seconds",
    )


def add_io_arguments(parser: argparse.ArgumentParser) -> None:
    """Add configuration and output arguments."""
    parser.add_argument("--config", type=Path, help="Configuration file (YAML or JSON)")

    parser.add_argument(
        "-o", "--output", type=Path, help="Write the data to a file instead of stdout"
    )

    parser.add_argument(
        "--compact", action="store_true", help="Print JSON on a single line"
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the gqlclient command."""
    parser = argparse.ArgumentParser(
        prog="gqlclient",
        description="Send a GraphQL operation and print the returned data as JSON.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    add_endpoint_arguments(parser)
    add_request_arguments(parser)
    add_io_arguments(parser)

    return parser
