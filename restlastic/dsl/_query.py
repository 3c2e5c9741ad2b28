from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import Field

from restlastic.core import DslNode

Value = Union[str, int, float, bool]


class MatchAll(DslNode):
    kind: Literal["match_all"] = "match_all"


class TermQuery(DslNode):
    kind: Literal["term"] = "term"

    field: str
    value: Value
    boost: float | None = None


class TermsQuery(DslNode):
    kind: Literal["terms"] = "terms"

    field: str
    values: list[Value]


class MatchQuery(DslNode):
    kind: Literal["match"] = "match"

    field: str
    query: Value
    operator: Literal["and", "or"] | None = None
    analyzer: str | None = None


class PrefixQuery(DslNode):
    kind: Literal["prefix"] = "prefix"

    field: str
    prefix: str


class WildcardQuery(DslNode):
    kind: Literal["wildcard"] = "wildcard"

    field: str
    pattern: str


class RangeQuery(DslNode):
    """Range query. Unset bounds are left out."""

    kind: Literal["range"] = "range"

    field: str
    gt: Value | None = None
    gte: Value | None = None
    lt: Value | None = None
    lte: Value | None = None
    format: str | None = None


class ExistsQuery(DslNode):
    kind: Literal["exists"] = "exists"

    field: str


class MissingQuery(DslNode):
    """Documents without a value for the field.

    2.x has a dedicated query; 6.x negates ``exists``.
    """

    kind: Literal["missing"] = "missing"

    field: str


class IdsQuery(DslNode):
    kind: Literal["ids"] = "ids"

    values: list[str]
    types: list[str] = []
    """Only sent to 2.x."""


class BoolQuery(DslNode):
    kind: Literal["bool"] = "bool"

    must: list[Query] = []
    filter: list[Query] = []
    should: list[Query] = []
    must_not: list[Query] = []
    minimum_should_match: int | str | None = None


class NestedQuery(DslNode):
    kind: Literal["nested"] = "nested"

    path: str
    query: Query
    score_mode: Literal["avg", "sum", "min", "max", "none"] | None = None


class ConstantScoreQuery(DslNode):
    kind: Literal["constant_score"] = "constant_score"

    filter: Query
    boost: float | None = None


Query = Annotated[
    Union[
        MatchAll,
        TermQuery,
        TermsQuery,
        MatchQuery,
        PrefixQuery,
        WildcardQuery,
        RangeQuery,
        ExistsQuery,
        MissingQuery,
        IdsQuery,
        BoolQuery,
        NestedQuery,
        ConstantScoreQuery,
    ],
    Field(discriminator="kind"),
]


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Sort(DslNode):
    field: str
    order: SortOrder | None = None


class QueryRoot(DslNode):
    """Root of a search or delete by query request."""

    query: Query = MatchAll()
    """Query tree."""

    from_: int | None = None
    """Offset of the first hit."""

    size: int | None = None
    """Number of hits."""

    sort: list[Sort] = []
    """Sort order."""

    source_includes: list[str] | None = None
    """Source fields to return."""

    source_excludes: list[str] | None = None
    """Source fields to leave out."""

    timeout: str | None = None
    """Search timeout, e.g. ``10s``."""

    terminate_after: int | None = None
    """Maximum documents to collect per shard."""


for _model in (BoolQuery, NestedQuery, ConstantScoreQuery, QueryRoot):
    _model.model_rebuild()
