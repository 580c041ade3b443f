"""
Request and response models for the query gateway.
"""

import json
from typing import Any, Dict, List, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GraphQLRequest(BaseModel):
    """A query or mutation document together with its variables."""

    model_config = ConfigDict(frozen=True)

    query: str
    variables: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("variables", mode="before")
    @classmethod
    def _default_variables(cls, value: Any) -> Any:
        return {} if value is None else value

    def serialize(self) -> str:
        """Canonical JSON body; equal requests always produce equal strings."""
        return json.dumps(
            {"query": self.query, "variables": self.variables},
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
        )


class QueryResponse(BaseModel):
    """Result of ``execute_query``: the response data and the kinds it contains."""

    model_config = ConfigDict(populate_by_name=True)

    data: Any
    type_names: List[str] = Field(default_factory=list, alias="typeNames")


RequestLike = Union[GraphQLRequest, Mapping[str, Any]]


def as_request(request: RequestLike) -> GraphQLRequest:
    """Coerce a mapping with ``query``/``variables`` keys into a request."""
    if isinstance(request, GraphQLRequest):
        return request
    return GraphQLRequest.model_validate(dict(request))
