"""
GraphQL models and data structures.

This module defines the outgoing request handed to customizers and the
pydantic models the response envelope is decoded into.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from multidict import CIMultiDict
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from yarl import URL

from .context import QueryContext

CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass
class GraphQLRequest:
    """
    Outgoing HTTP request, mutable until dispatch.

    Customizers receive this object and may change any field: overwrite
    headers, rewrite the URL (for example to add query parameters) or replace
    ``context`` with a derived :class:`~gqlclient.context.QueryContext`.
    """

    method: str
    url: URL
    headers: CIMultiDict[str]
    body: bytes
    context: QueryContext

    def set_header(self, name: str, value: str) -> None:
        """Set a header, replacing any existing values."""
        self.headers[name] = value

    def update_query(self, params: Dict[str, Any]) -> None:
        """Merge ``params`` into the URL's query string."""
        self.url = self.url.update_query(params)


RequestCustomizer = Callable[[GraphQLRequest], None]


class GraphQLErrorLocation(BaseModel):
    """Position of an error in the query document."""

    line: int = 0
    column: int = 0

    @field_validator("line", "column", mode="before")
    @classmethod
    def _null_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class GraphQLErrorDetail(BaseModel):
    """
    One item of a response's ``errors`` array.

    Its structure follows the "Errors" section of the GraphQL specification;
    every field is optional and unknown fields are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    message: str = ""
    locations: List[GraphQLErrorLocation] = Field(default_factory=list)
    path: List[Union[str, int]] = Field(default_factory=list)
    extensions: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("message", "locations", "path", "extensions", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        # Servers may send null for any of these; treat it like an absent key.
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value


class ResponseEnvelope(BaseModel):
    """Outer JSON object returned by the server."""

    model_config = ConfigDict(extra="ignore")

    data: Any = None
    errors: Optional[List[GraphQLErrorDetail]] = None
    extensions: Optional[Dict[str, Any]] = None

    @property
    def has_data(self) -> bool:
        """Whether the server sent a ``data`` key at all (``null`` counts)."""
        return "data" in self.model_fields_set

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
