"""
Response classification.

A response is decided by an ordered rule table: the first rule whose
condition holds produces the outcome. Keeping the rules in one table makes
the precedence between decode failures, the HTTP status and the ``errors``
array explicit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from pydantic import TypeAdapter, ValidationError

from .exceptions import GraphQLDecodingError, GraphQLErrorResponse
from .models import ResponseEnvelope

logger = logging.getLogger(__name__)

# Bytes of the raw body kept on GraphQLErrorResponse for diagnostics.
RAW_BODY_LIMIT = 2048


@dataclass(frozen=True)
class Exchange:
    """A received response, decoded as far as the envelope."""

    status: int
    raw_body: bytes
    envelope: Optional[ResponseEnvelope]
    decode_error: Optional[ValidationError] = None
    endpoint: Optional[str] = None

    @classmethod
    def decode(cls, status: int, raw_body: bytes, endpoint: Optional[str] = None) -> "Exchange":
        try:
            envelope = ResponseEnvelope.model_validate_json(raw_body)
        except ValidationError as e:
            return cls(status, raw_body, None, e, endpoint)
        return cls(status, raw_body, envelope, None, endpoint)

    @property
    def is_success_status(self) -> bool:
        return 200 <= self.status < 300

    @property
    def raw_prefix(self) -> bytes:
        return self.raw_body[:RAW_BODY_LIMIT]


@dataclass(frozen=True)
class Rule:
    """One row of the classification table."""

    name: str
    applies: Callable[[Exchange], bool]
    resolve: Callable[[Exchange, Any], Any]


def _error_response(exchange: Exchange, _result_type: Any) -> Any:
    errors = exchange.envelope.errors if exchange.envelope is not None else None
    raise GraphQLErrorResponse(
        exchange.status,
        errors or [],
        exchange.raw_prefix,
        endpoint=exchange.endpoint,
    )


def _decoding_error(exchange: Exchange, _result_type: Any) -> Any:
    raise GraphQLDecodingError(
        f"error decoding response: {exchange.decode_error}",
        exchange.endpoint,
        status_code=exchange.status,
    ) from exchange.decode_error


def _missing_data(exchange: Exchange, _result_type: Any) -> Any:
    raise GraphQLDecodingError(
        "error decoding data payload: response has no data field",
        exchange.endpoint,
        status_code=exchange.status,
    )


def _decode_data(exchange: Exchange, result_type: Any) -> Any:
    data = exchange.envelope.data if exchange.envelope is not None else None
    try:
        return TypeAdapter(result_type).validate_python(data)
    except ValidationError as e:
        raise GraphQLDecodingError(
            f"error decoding data payload: {e}",
            exchange.endpoint,
            status_code=exchange.status,
        ) from e


CLASSIFICATION_RULES: Tuple[Rule, ...] = (
    Rule(
        "unparseable body, error status",
        lambda x: x.envelope is None and not x.is_success_status,
        _error_response,
    ),
    Rule(
        "unparseable body, success status",
        lambda x: x.envelope is None,
        _decoding_error,
    ),
    Rule(
        "error status or reported errors",
        lambda x: not x.is_success_status or bool(x.envelope and x.envelope.has_errors),
        _error_response,
    ),
    Rule(
        "missing data",
        lambda x: x.envelope is not None and not x.envelope.has_data,
        _missing_data,
    ),
    Rule("data", lambda x: True, _decode_data),
)


def match_rule(exchange: Exchange) -> Rule:
    """Return the first rule of :data:`CLASSIFICATION_RULES` that applies."""
    for rule in CLASSIFICATION_RULES:
        if rule.applies(exchange):
            return rule
    raise AssertionError("classification table has no catch-all rule")


def classify_response(
    status: int,
    raw_body: bytes,
    result_type: Any = Any,
    endpoint: Optional[str] = None,
) -> Any:
    """
    Classify a response and return its decoded data.

    Args:
        status: HTTP status code
        raw_body: Complete response body
        result_type: Type the ``data`` value is validated into
        endpoint: Endpoint, attached to raised errors

    Returns:
        The ``data`` value validated into ``result_type``

    Raises:
        GraphQLErrorResponse: Non-2xx status or a non-empty ``errors`` array
        GraphQLDecodingError: Unparseable body with a 2xx status, or ``data``
            missing or incompatible with ``result_type``
    """
    exchange = Exchange.decode(status, raw_body, endpoint)
    rule = match_rule(exchange)
    logger.debug("Classified %d response from %s as %r", status, endpoint, rule.name)
    return rule.resolve(exchange, result_type)
