from __future__ import annotations

from typing import Any, Literal, Union

from restlastic.core import DataModel
from restlastic.dsl import EsVersion


class RawJsonResponse(DataModel):
    """Status and decoded body of one request."""

    status: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class ScrollId(DataModel):
    """Opaque server side cursor token."""

    id: str


class SearchHit(DataModel):
    id: str
    """Document id."""

    index: str | None = None
    type: str | None = None
    score: float | None = None
    source: dict[str, Any] | None = None


class RawSearchResponse(DataModel):
    hits: list[SearchHit] = []


class SearchResponse(DataModel):
    raw_search_response: RawSearchResponse
    """Hits of the page."""

    json_str: str
    """Response body as returned."""

    @property
    def ids(self) -> list[str]:
        return [hit.id for hit in self.raw_search_response.hits]


class ScrollPage(DataModel):
    """One page of a scroll traversal."""

    scroll_id: ScrollId
    """Token to request the next page with."""

    response: SearchResponse

    @property
    def empty(self) -> bool:
        return not self.response.raw_search_response.hits


class DeleteResponse(DataModel):
    """Outcome of deleting one document."""

    status: int
    result: str | None = None
    """``deleted`` or ``not_found``."""

    error: Any | None = None
    """Error reported for this document."""

    @property
    def deleted(self) -> bool:
        return self.result == "deleted"


class ScriptFound(DataModel):
    kind: Literal["found"] = "found"

    id: str
    script: dict[str, Any] | str
    """Stored script as returned by the server."""


class ScriptNotFound(DataModel):
    kind: Literal["not_found"] = "not_found"

    id: str


ScriptLookup = Union[ScriptFound, ScriptNotFound]


class AddScriptResponse(DataModel):
    acknowledged: bool


class ClientConfig(DataModel):
    """Client configuration."""

    hosts: str | list[str] | dict[str, str | int] = "http://localhost:9200"
    """Elasticsearch hosts."""

    search_hosts: str | list[str] | dict[str, str | int] | None = None
    """Hosts for search and scroll requests. Defaults to ``hosts``."""

    api_key: str | list[str] | None = None
    basic_auth: str | list[str] | None = None
    bearer_auth: str | None = None
    headers: dict[str, str] | None = None
    verify_certs: bool | None = None
    ca_certs: str | None = None

    request_timeout: float = 30.0
    """Timeout of every request in seconds."""

    default_result_window: str = "1m"
    """Scroll keep alive used when a call does not give one."""

    version: EsVersion = EsVersion.V6
    """Protocol version of the cluster."""

    nparams: dict[str, Any] = {}
    """Native parameters to the transport."""
