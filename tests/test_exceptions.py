"""
Tests for the exceptions module.
"""

import pytest

from gqlclient.exceptions import (
    GraphQLClientError,
    GraphQLDecodingError,
    GraphQLEncodingError,
    GraphQLErrorResponse,
    GraphQLRequestBuildError,
    GraphQLTransportError,
    status_text,
)
from gqlclient.models import GraphQLErrorDetail


class TestGraphQLClientError:
    """Test the base GraphQLClientError exception."""

    def test_basic_exception(self):
        error = GraphQLClientError("Test error message")
        assert str(error) == "Test error message"
        assert error.endpoint is None
        assert error.details == {}

    def test_exception_with_details(self):
        error = GraphQLClientError(
            "Test error", endpoint="https://api.example.com/graphql", status_code=500
        )

        assert error.message == "Test error"
        assert error.endpoint == "https://api.example.com/graphql"
        assert error.details["status_code"] == 500

    @pytest.mark.parametrize(
        "error_class",
        [
            GraphQLEncodingError,
            GraphQLRequestBuildError,
            GraphQLTransportError,
            GraphQLDecodingError,
        ],
    )
    def test_hierarchy(self, error_class):
        assert issubclass(error_class, GraphQLClientError)
        assert issubclass(GraphQLErrorResponse, GraphQLClientError)

    def test_transport_error_keeps_cause(self):
        cause = OSError("network is unreachable")
        error = GraphQLTransportError("error performing request", original_error=cause)
        assert error.original_error is cause


class TestStatusText:
    """Test reason phrases used in error messages."""

    @pytest.mark.parametrize(
        "code,text",
        [
            (200, "OK"),
            (404, "Not Found"),
            (416, "Requested Range Not Satisfiable"),
            (418, "I'm a teapot"),
            (422, "Unprocessable Entity"),
            (502, "Bad Gateway"),
            (999, ""),
        ],
    )
    def test_status_text(self, code, text):
        assert status_text(code) == text


class TestGraphQLErrorResponse:
    """Test ErrorResponse stringification."""

    def test_first_error_message(self):
        error = GraphQLErrorResponse(
            418,
            [GraphQLErrorDetail(message="m1"), GraphQLErrorDetail(message="m2")],
        )
        assert str(error) == "418 I'm a teapot: m1"
        assert error.error_messages == ["m1", "m2"]

    def test_raw_body_when_no_errors(self):
        error = GraphQLErrorResponse(503, [], b"upstream unavailable")
        assert str(error) == "503 Service Unavailable: upstream unavailable"

    def test_undecodable_raw_body(self):
        error = GraphQLErrorResponse(500, [], b"bad \xff byte")
        assert str(error) == "500 Internal Server Error: bad � byte"

    def test_empty(self):
        assert str(GraphQLErrorResponse(500)) == "500 Internal Server Error: "

    def test_unknown_status(self):
        error = GraphQLErrorResponse(599, [GraphQLErrorDetail(message="odd")])
        assert str(error) == "599 : odd"

    def test_errors_take_precedence_over_body(self):
        error = GraphQLErrorResponse(
            400, [GraphQLErrorDetail(message="syntax error")], b'{"errors":[...]}'
        )
        assert str(error) == "400 Bad Request: syntax error"

    def test_deterministic(self):
        error = GraphQLErrorResponse(401, [GraphQLErrorDetail(message="no token")])
        assert str(error) == str(error) == error.message
