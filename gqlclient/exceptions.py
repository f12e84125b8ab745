"""
Exception hierarchy for the GraphQL client.

Every error raised by :meth:`gqlclient.GraphQLClient.query` derives from
:class:`GraphQLClientError`. Local failures (encoding, request building) and
infrastructure failures (transport) are kept apart from
:class:`GraphQLErrorResponse`, the structured application-level failure that
callers are expected to match on.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, List, Optional, Sequence

from .models import GraphQLErrorDetail

# Reason phrases whose wording in http.HTTPStatus differs from the IANA
# registry, or changed between Python releases.
_STATUS_TEXT_OVERRIDES = {
    413: "Request Entity Too Large",
    414: "Request URI Too Long",
    416: "Requested Range Not Satisfiable",
    418: "I'm a teapot",
    422: "Unprocessable Entity",
}


def status_text(status_code: int) -> str:
    """Return the standard reason phrase for an HTTP status code, or ``""``."""
    if status_code in _STATUS_TEXT_OVERRIDES:
        return _STATUS_TEXT_OVERRIDES[status_code]
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


class GraphQLClientError(Exception):
    """
    Base exception for all GraphQL client operations.

    Attributes:
        message: Human-readable error message
        endpoint: Endpoint the failing request targeted (if known)
        details: Additional error details as keyword arguments
    """

    def __init__(self, message: str, endpoint: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.endpoint = endpoint
        self.details = kwargs


class GraphQLEncodingError(GraphQLClientError):
    """Raised when the query variables cannot be serialized to JSON."""

    pass


class GraphQLRequestBuildError(GraphQLClientError):
    """Raised when the outgoing request cannot be built (malformed endpoint)."""

    pass


class GraphQLTransportError(GraphQLClientError):
    """
    Raised for network, DNS, timeout and cancellation failures.

    These are local or infrastructure failures: the server never produced a
    response that could be classified.

    Attributes:
        original_error: The underlying exception, if any
    """

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, endpoint)
        self.original_error = original_error


class GraphQLDecodingError(GraphQLClientError):
    """
    Raised when a successful response cannot be decoded.

    Covers an unparseable envelope paired with a 2xx status, an envelope
    without ``data``, and ``data`` that does not fit the requested type.
    """

    pass


class GraphQLErrorResponse(GraphQLClientError):
    """
    Application-level failure reported by the server.

    Raised when the HTTP status is not 2xx or the response's ``errors`` array
    is non-empty.

    Attributes:
        status_code: HTTP status code of the response
        errors: Items of the response's ``errors`` array (possibly empty)
        raw_body: Up to the first 2048 bytes of the response body
    """

    def __init__(
        self,
        status_code: int,
        errors: Optional[Sequence[GraphQLErrorDetail]] = None,
        raw_body: bytes = b"",
        endpoint: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.errors: List[GraphQLErrorDetail] = list(errors or [])
        self.raw_body = raw_body
        super().__init__(self._render(), endpoint)

    @property
    def error_messages(self) -> List[str]:
        """Messages of all reported errors, in order."""
        return [error.message for error in self.errors]

    def _render(self) -> str:
        if self.errors:
            message = self.errors[0].message
        elif self.raw_body:
            message = self.raw_body.decode("utf-8", errors="replace")
        else:
            message = ""
        return f"{self.status_code} {status_text(self.status_code)}: {message}"

    def __str__(self) -> str:
        return self._render()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status_code={self.status_code!r}, "
            f"errors={self.errors!r}, raw_body={self.raw_body!r})"
        )
