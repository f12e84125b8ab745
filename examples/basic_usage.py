#!/usr/bin/env python3
"""
Basic usage examples for the gqlclient library.

This script runs a few queries against a public GraphQL API, showing plain
and typed results, request customizers, deadlines and error handling.
"""

import asyncio
from typing import List, Optional

import aiohttp
from pydantic import BaseModel

from gqlclient import (
    GraphQLClient,
    GraphQLErrorResponse,
    GraphQLTransportError,
    QueryContext,
    with_header,
    with_query_params,
)

ENDPOINT = "https://countries.trevorblades.com/graphql"


class Country(BaseModel):
    code: str
    name: str
    capital: Optional[str] = None


class CountriesData(BaseModel):
    countries: List[Country]


async def example_simple(client: GraphQLClient) -> None:
    """Example: Untyped query, data comes back as plain JSON values."""
    print("=== Simple Query ===\n")

    data = await client.query('query { country(code: "JP") { name capital } }')
    print(f"country = {data['country']}\n")


async def example_detailed(client: GraphQLClient) -> None:
    """Example: Variables, typed result and a call-level customizer."""
    print("=== Typed Query With Variables ===\n")

    query = """
        query Countries($codes: [String!]) {
            countries(filter: {code: {in: $codes}}) { code name capital }
        }
    """
    data = await client.query(
        query,
        {"codes": ["FR", "DE", "JP"]},
        with_query_params({"source": "example"}),
        context=QueryContext(timeout=10.0),
        result_type=CountriesData,
    )
    for country in data.countries:
        print(f"{country.code}: {country.name} (capital: {country.capital})")
    print()


async def example_error_response(client: GraphQLClient) -> None:
    """Example: Errors reported by the server."""
    print("=== Error Response ===\n")

    try:
        await client.query("query { noSuchField }")
    except GraphQLErrorResponse as e:
        print(f"{e}")
        print(f"HTTP status: {e.status_code}")
        print(f"first error: {e.errors[0].message!r}\n")


async def example_cancellation(client: GraphQLClient) -> None:
    """Example: Cancelling a call through its context."""
    print("=== Cancellation ===\n")

    ctx = QueryContext()
    asyncio.get_running_loop().call_soon(ctx.cancel)
    try:
        await client.query("query { countries { code } }", context=ctx)
    except GraphQLTransportError as e:
        print(f"aborted: {e}\n")


async def main() -> None:
    """Run all examples."""
    async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=30)) as session:
        client = GraphQLClient(ENDPOINT, session, with_header("X-Example", "basic_usage"))

        await example_simple(client)
        await example_detailed(client)
        await example_error_response(client)
        await example_cancellation(client)


if __name__ == "__main__":
    asyncio.run(main())
