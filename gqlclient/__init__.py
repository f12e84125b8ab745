"""
Minimal async GraphQL client built on aiohttp.

This package posts a GraphQL operation to a server and decodes the response
envelope into Python data, telling apart transport failures, malformed
responses and errors reported by the server.

Features:
- One call per operation, no hidden retries or caching
- Request customizers applied at client and call level
- Cancellation, deadlines and request-scoped values via QueryContext
- Typed results through pydantic validation
"""

from .client import GraphQLClient
from .context import QueryContext
from .customizers import (
    with_context_value,
    with_header,
    with_headers,
    with_query_params,
    with_timeout,
)
from .exceptions import (
    GraphQLClientError,
    GraphQLDecodingError,
    GraphQLEncodingError,
    GraphQLErrorResponse,
    GraphQLRequestBuildError,
    GraphQLTransportError,
)
from .models import (
    GraphQLErrorDetail,
    GraphQLErrorLocation,
    GraphQLRequest,
    RequestCustomizer,
    ResponseEnvelope,
)
from .session import create_session

__version__ = "0.1.0"

__all__ = [
    # Client
    "GraphQLClient",
    "QueryContext",
    "create_session",
    # Customizers
    "RequestCustomizer",
    "with_header",
    "with_headers",
    "with_query_params",
    "with_context_value",
    "with_timeout",
    # Models
    "GraphQLRequest",
    "GraphQLErrorDetail",
    "GraphQLErrorLocation",
    "ResponseEnvelope",
    # Exceptions
    "GraphQLClientError",
    "GraphQLEncodingError",
    "GraphQLRequestBuildError",
    "GraphQLTransportError",
    "GraphQLDecodingError",
    "GraphQLErrorResponse",
]
