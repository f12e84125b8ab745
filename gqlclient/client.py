"""
GraphQL client implementation.

This module provides :class:`GraphQLClient`, a thin client that posts one
GraphQL operation per call and decodes the response envelope.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Awaitable, Mapping, Optional, Tuple, TypeVar

import aiohttp
from multidict import CIMultiDict
from yarl import URL

from .config.models import ClientConfig
from .context import CANCELED, DEADLINE_EXCEEDED, QueryContext
from .exceptions import (
    GraphQLEncodingError,
    GraphQLRequestBuildError,
    GraphQLTransportError,
)
from .models import CONTENT_TYPE, GraphQLRequest, RequestCustomizer
from .response import classify_response
from .session import create_session

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GraphQLClient:
    """
    Generic GraphQL client.

    The client holds an endpoint, a transport handle (an
    ``aiohttp.ClientSession``) and request customizers that are applied to
    every call. It keeps no per-call state, so one instance can serve many
    concurrent tasks on the session's event loop.

    Examples:
        Basic query:
        ```python
        async with aiohttp.ClientSession() as session:
            client = GraphQLClient("https://api.example.com/graphql", session)
            data = await client.query(
                "query GetUser($id: ID!) { user(id: $id) { name } }",
                {"id": "123"},
            )
            print(data["user"]["name"])
        ```

        Typed result, per-call header and a deadline:
        ```python
        class UserData(BaseModel):
            user: User

        data = await client.query(
            query,
            {"id": "123"},
            with_header("Authorization", f"Bearer {token}"),
            context=QueryContext(timeout=5.0),
            result_type=UserData,
        )
        ```

        Handling application errors:
        ```python
        try:
            await client.query(query)
        except GraphQLErrorResponse as e:
            print(e.status_code, e.error_messages)
        ```
    """

    def __init__(
        self,
        endpoint: str,
        session: aiohttp.ClientSession,
        *customizers: RequestCustomizer,
    ) -> None:
        """
        Initialize GraphQL client.

        No I/O happens here; the endpoint is checked when a request is built.

        Args:
            endpoint: GraphQL endpoint URL
            session: Transport handle reused by every call
            *customizers: Applied, in order, to the request of every call
        """
        self._endpoint = endpoint
        self._session = session
        self._customizers: Tuple[RequestCustomizer, ...] = tuple(customizers)
        self._owns_session = False

    @classmethod
    def from_config(
        cls, config: ClientConfig, *customizers: RequestCustomizer
    ) -> "GraphQLClient":
        """
        Create a client with its own session built from ``config``.

        The client closes that session in :meth:`close`. Must be called from
        a coroutine.
        """
        if not config.endpoint:
            raise GraphQLRequestBuildError("error creating request: no endpoint configured")
        client = cls(config.endpoint, create_session(config), *customizers)
        client._owns_session = True
        return client

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def session(self) -> aiohttp.ClientSession:
        return self._session

    @property
    def customizers(self) -> Tuple[RequestCustomizer, ...]:
        return self._customizers

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "GraphQLClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def query(
        self,
        query: str,
        variables: Optional[Mapping[str, Any]] = None,
        *customizers: RequestCustomizer,
        context: Optional[QueryContext] = None,
        result_type: Any = Any,
    ) -> Any:
        """
        Send a query and return the decoded ``data`` field.

        If the response's ``errors`` array has any items, or the HTTP status
        is not 2xx, a :class:`GraphQLErrorResponse` is raised. Otherwise the
        ``data`` value is validated into ``result_type`` and returned.

        Args:
            query: GraphQL document
            variables: Operation variables; must be JSON-serializable
            *customizers: Run after the client's customizers
            context: Cancellation, deadline and values for this call
            result_type: Type ``data`` is validated into (any pydantic-compatible type)

        Returns:
            The decoded ``data`` value

        Raises:
            GraphQLEncodingError: Variables are not JSON-serializable
            GraphQLRequestBuildError: The endpoint is malformed
            GraphQLTransportError: Network failure, timeout or context cancellation
            GraphQLErrorResponse: Non-2xx status or errors reported by the server
            GraphQLDecodingError: Unexpected response body or ``data`` shape
        """
        body = self._encode(query, variables)
        request = self._build_request(body, context or QueryContext.background())

        for customize in self._customizers:
            customize(request)
        for customize in customizers:
            customize(request)

        ctx = request.context
        logger.debug("POST %s (%d bytes)", request.url, len(request.body))

        response = await self._bounded(ctx, self._send(request))
        async with response:
            raw_body = await self._bounded(ctx, response.read())

        logger.debug(
            "Received %d from %s (%d bytes)", response.status, request.url, len(raw_body)
        )
        return classify_response(response.status, raw_body, result_type, self._endpoint)

    def _encode(self, query: str, variables: Optional[Mapping[str, Any]]) -> bytes:
        payload = {
            "query": query,
            "variables": dict(variables) if variables is not None else None,
        }
        try:
            return json.dumps(
                payload,
                separators=(",", ":"),
                sort_keys=True,
                ensure_ascii=False,
                allow_nan=False,
            ).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise GraphQLEncodingError(
                f"error encoding variables: {e}", self._endpoint
            ) from e

    def _build_request(self, body: bytes, context: QueryContext) -> GraphQLRequest:
        try:
            url = URL(self._endpoint)
        except (TypeError, ValueError) as e:
            raise GraphQLRequestBuildError(
                f"error creating request: {e}", str(self._endpoint)
            ) from e

        if url.scheme not in ("http", "https") or not url.host:
            raise GraphQLRequestBuildError(
                f"error creating request: unsupported endpoint {self._endpoint!r}",
                self._endpoint,
            )

        headers: CIMultiDict[str] = CIMultiDict()
        headers["Content-Type"] = CONTENT_TYPE
        return GraphQLRequest("POST", url, headers, body, context)

    async def _send(self, request: GraphQLRequest) -> aiohttp.ClientResponse:
        return await self._session.request(
            request.method,
            request.url,
            headers=request.headers,
            data=request.body,
        )

    async def _bounded(self, ctx: QueryContext, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` until it completes or ``ctx`` is done."""
        reason = ctx.error
        if reason is not None:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise GraphQLTransportError(
                f"error performing request: {reason}", self._endpoint
            )

        task = asyncio.ensure_future(awaitable)
        remove_callback = ctx.on_cancel(task.cancel)
        try:
            return await asyncio.wait_for(task, timeout=ctx.remaining())
        except asyncio.CancelledError:
            if not ctx.cancelled:
                raise
            logger.debug("Request to %s aborted: %s", self._endpoint, CANCELED)
            raise GraphQLTransportError(
                f"error performing request: {CANCELED}", self._endpoint
            ) from None
        except asyncio.TimeoutError as e:
            # Cancelled task: the deadline timer fired, whatever the clock reads now.
            reason = DEADLINE_EXCEEDED if task.cancelled() else "request timed out"
            logger.debug("Request to %s aborted: %s", self._endpoint, reason)
            raise GraphQLTransportError(
                f"error performing request: {reason}", self._endpoint, original_error=e
            ) from e
        except aiohttp.ClientError as e:
            logger.debug("Request to %s failed: %s", self._endpoint, e)
            raise GraphQLTransportError(
                f"error performing request: {e}", self._endpoint, original_error=e
            ) from e
        finally:
            remove_callback()
