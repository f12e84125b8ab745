"""
Shared test fixtures for the gqlclient test suite.
"""

import asyncio
from dataclasses import dataclass
from typing import AsyncGenerator, List, Optional

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from multidict import CIMultiDictProxy, MultiDictProxy


@dataclass
class RecordedRequest:
    """A request as seen by the stub server."""

    method: str
    path: str
    query: MultiDictProxy
    headers: CIMultiDictProxy
    body: bytes


class GraphQLServerStub:
    """
    Local GraphQL endpoint that records requests and replays a canned response.

    Set ``hang`` to keep requests pending until the fixture is torn down, or
    ``stall_after`` to send the headers and that many body bytes, then stall.
    """

    def __init__(self) -> None:
        self.status = 200
        self.body = b'{"data":null}'
        self.content_type = "application/json"
        self.hang = False
        self.stall_after: Optional[int] = None
        self.requests: List[RecordedRequest] = []
        self.release = asyncio.Event()
        self.server: Optional[TestServer] = None

    def respond(self, body: str, status: int = 200, content_type: str = "application/json") -> None:
        self.body = body.encode("utf-8")
        self.status = status
        self.content_type = content_type

    @property
    def url(self) -> str:
        assert self.server is not None
        return str(self.server.make_url("/graphql"))

    @property
    def last_request(self) -> RecordedRequest:
        assert self.requests, "no request received"
        return self.requests[-1]

    async def handle(self, request: web.Request) -> web.StreamResponse:
        self.requests.append(
            RecordedRequest(
                method=request.method,
                path=request.path,
                query=request.query,
                headers=request.headers,
                body=await request.read(),
            )
        )
        if self.hang:
            await self.release.wait()
        if self.stall_after is not None:
            response = web.StreamResponse(status=self.status)
            response.content_type = self.content_type
            response.content_length = len(self.body)
            await response.prepare(request)
            await response.write(self.body[: self.stall_after])
            await self.release.wait()
            return response
        return web.Response(status=self.status, body=self.body, content_type=self.content_type)


@pytest.fixture
async def graphql_server() -> AsyncGenerator[GraphQLServerStub, None]:
    """Start a stub GraphQL server on a free local port."""
    stub = GraphQLServerStub()
    app = web.Application()
    app.router.add_post("/graphql", stub.handle)

    server = TestServer(app)
    await server.start_server()
    stub.server = server

    yield stub

    stub.release.set()
    await server.close()


@pytest.fixture
async def session() -> AsyncGenerator[aiohttp.ClientSession, None]:
    """Create a plain aiohttp session, closed after the test."""
    async with aiohttp.ClientSession() as client_session:
        yield client_session
