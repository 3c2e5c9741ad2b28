from restlastic.core.exceptions import BadRequestError

from ._mapping import (
    BasicFieldMapping,
    BasicObjectMapping,
    CompletionContext,
    CompletionMapping,
    CompletionMappingWithoutPath,
    FieldMapping,
    FieldsMapping,
    FieldType,
    IndexMapping,
    IndexOption,
    IndexType,
    Mapping,
    NestedFieldMapping,
    NestedObjectMapping,
)
from ._models import EsVersion, Index, Type
from ._operations import (
    BulkDelete,
    CreateIndex,
    IndexSetting,
    ScriptSource,
    Scroll,
)
from ._query import (
    BoolQuery,
    ConstantScoreQuery,
    ExistsQuery,
    IdsQuery,
    MatchAll,
    MatchQuery,
    MissingQuery,
    NestedQuery,
    PrefixQuery,
    Query,
    QueryRoot,
    RangeQuery,
    Sort,
    SortOrder,
    TermQuery,
    TermsQuery,
    WildcardQuery,
)
from ._renderer import Renderer, render

__all__ = [
    # Versions and names
    "EsVersion",
    "Index",
    "Type",
    # Mappings
    "BasicFieldMapping",
    "BasicObjectMapping",
    "CompletionContext",
    "CompletionMapping",
    "CompletionMappingWithoutPath",
    "FieldMapping",
    "FieldsMapping",
    "FieldType",
    "IndexMapping",
    "IndexOption",
    "IndexType",
    "Mapping",
    "NestedFieldMapping",
    "NestedObjectMapping",
    # Queries
    "BoolQuery",
    "ConstantScoreQuery",
    "ExistsQuery",
    "IdsQuery",
    "MatchAll",
    "MatchQuery",
    "MissingQuery",
    "NestedQuery",
    "PrefixQuery",
    "Query",
    "QueryRoot",
    "RangeQuery",
    "Sort",
    "SortOrder",
    "TermQuery",
    "TermsQuery",
    "WildcardQuery",
    # Operations
    "BulkDelete",
    "CreateIndex",
    "IndexSetting",
    "ScriptSource",
    "Scroll",
    # Rendering
    "Renderer",
    "render",
    "BadRequestError",
]
