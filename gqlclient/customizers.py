"""
Stock request customizers.

A customizer is any callable taking a :class:`~gqlclient.models.GraphQLRequest`;
these factories cover the common cases.
"""

from __future__ import annotations

from typing import Any, Mapping

from .models import GraphQLRequest, RequestCustomizer


def with_header(name: str, value: str) -> RequestCustomizer:
    """Set one header, overwriting earlier values."""

    def customize(request: GraphQLRequest) -> None:
        request.set_header(name, value)

    return customize


def with_headers(headers: Mapping[str, str]) -> RequestCustomizer:
    """Set several headers, overwriting earlier values."""
    items = dict(headers)

    def customize(request: GraphQLRequest) -> None:
        for name, value in items.items():
            request.set_header(name, value)

    return customize


def with_query_params(params: Mapping[str, Any]) -> RequestCustomizer:
    """Merge query parameters into the request URL."""
    items = dict(params)

    def customize(request: GraphQLRequest) -> None:
        request.update_query(items)

    return customize


def with_context_value(key: Any, value: Any) -> RequestCustomizer:
    """Bind a value to the request's context chain."""

    def customize(request: GraphQLRequest) -> None:
        request.context = request.context.with_value(key, value)

    return customize


def with_timeout(seconds: float) -> RequestCustomizer:
    """Bound the request by a deadline ``seconds`` from when it is customized."""

    def customize(request: GraphQLRequest) -> None:
        request.context = request.context.with_timeout(seconds)

    return customize
