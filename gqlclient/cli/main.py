#!/usr/bin/env python3
"""
Command-line interface for the gqlclient library.

Sends one GraphQL operation and prints the ``data`` of the response as JSON.
Exit codes: 0 on success, 1 when the server reported errors, 2 for any other
failure (configuration, encoding, transport, decoding).
"""

import asyncio
import logging
import sys
from typing import List, Optional

from ..client import GraphQLClient
from ..config import ClientConfig, ConfigLoader, LogLevel
from ..context import QueryContext
from ..customizers import with_headers
from ..exceptions import GraphQLClientError, GraphQLErrorResponse
from ..logging import cleanup_logging, setup_logging
from .parsers import create_parser
from .utils import format_data, load_query, parse_headers, parse_variables

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR_RESPONSE = 1
EXIT_FAILURE = 2


async def run(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return its exit code."""
    args = create_parser().parse_args(argv)

    try:
        config = ConfigLoader().load_config(args.config)
        client_config = config.client
        if args.endpoint:
            client_config = ClientConfig(
                **{**client_config.model_dump(), "endpoint": args.endpoint}
            )
        if not client_config.endpoint:
            raise ValueError("No endpoint given (argument or client.endpoint in config)")

        query = load_query(args.query, args.query_file)
        variables = parse_variables(args.vars, args.variables)
        headers = parse_headers(args.headers)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    log_config = config.logging
    if args.verbose:
        log_config = log_config.model_copy(update={"level": LogLevel.DEBUG})
    setup_logging(log_config)

    context = QueryContext(timeout=args.timeout) if args.timeout is not None else None
    customizers = [with_headers(headers)] if headers else []

    try:
        async with GraphQLClient.from_config(client_config) as client:
            data = await client.query(query, variables, *customizers, context=context)
    except GraphQLErrorResponse as e:
        for detail in e.errors[1:]:
            logger.info("Additional error: %s", detail.message)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR_RESPONSE
    except GraphQLClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    finally:
        cleanup_logging()

    output = format_data(data, compact=args.compact)
    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
    else:
        print(output)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Console script entry point."""
    try:
        return asyncio.run(run(argv))
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
