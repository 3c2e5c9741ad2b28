from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import Field

from restlastic.core import DslNode

from ._models import EsVersion, Type


class FieldType(str, Enum):
    # String
    KEYWORD = "keyword"
    TEXT = "text"
    STRING = "string"  # 2.x only

    # Numeric
    LONG = "long"
    INTEGER = "integer"
    SHORT = "short"
    BYTE = "byte"
    DOUBLE = "double"
    FLOAT = "float"

    # Other primitives
    DATE = "date"
    BOOLEAN = "boolean"
    BINARY = "binary"

    # Spatial
    GEO_POINT = "geo_point"


class IndexType(str, Enum):
    """Indexing mode of a field.

    Attributes:
        NOT_ANALYZED: Indexed verbatim.
        NOT_INDEXED: Not searchable.
        INDEXED: Indexed with the default analysis.
    """

    NOT_ANALYZED = "not_analyzed"
    NOT_INDEXED = "not_indexed"
    INDEXED = "indexed"

    def rep(self, version: EsVersion) -> str:
        """Wire value of the ``index`` key.

        An empty string means the key is left out.
        """
        if version == EsVersion.V2:
            return {
                IndexType.NOT_ANALYZED: "not_analyzed",
                IndexType.NOT_INDEXED: "no",
                IndexType.INDEXED: "",
            }[self]
        return {
            IndexType.NOT_ANALYZED: "true",
            IndexType.NOT_INDEXED: "false",
            IndexType.INDEXED: "true",
        }[self]


class IndexOption(str, Enum):
    DOCS = "docs"
    FREQS = "freqs"
    POSITIONS = "positions"
    OFFSETS = "offsets"


class BasicFieldMapping(DslNode):
    """Leaf field mapping."""

    kind: Literal["basic"] = "basic"

    tpe: FieldType
    """Field type."""

    index: IndexType | None = None
    """Indexing mode."""

    analyzer: str | None = None
    """Index time analyzer."""

    ignore_above: int | None = None
    """Strings longer than this are not indexed."""

    search_analyzer: str | None = None
    """Search time analyzer."""

    index_option: IndexOption | None = None
    """Postings detail."""

    fields: FieldsMapping | None = None
    """Multi-fields."""

    fielddata: bool | None = None
    """Enable fielddata on text fields."""

    normalizer: str | None = None
    """Keyword normalizer. Only rendered for 6.x."""


class BasicObjectMapping(DslNode):
    kind: Literal["object"] = "object"

    fields: dict[str, FieldMapping]


class FieldsMapping(DslNode):
    kind: Literal["fields"] = "fields"

    fields: dict[str, FieldMapping]


class NestedObjectMapping(DslNode):
    kind: Literal["nested_object"] = "nested_object"

    fields: dict[str, FieldMapping]


class CompletionContext(DslNode):
    path: str
    """Document field the category is read from."""


class CompletionMapping(DslNode):
    """Completion suggester field with category contexts."""

    kind: Literal["completion"] = "completion"

    context: dict[str, CompletionContext]
    """Context name to context."""

    analyzer: str = "keyword"


class CompletionMappingWithoutPath(DslNode):
    """Completion suggester field whose categories come with the input."""

    kind: Literal["completion_without_path"] = "completion_without_path"

    context: list[str]
    """Context names."""

    analyzer: str = "keyword"


class NestedFieldMapping(DslNode):
    """Bare nested marker without properties."""

    kind: Literal["nested"] = "nested"


FieldMapping = Annotated[
    Union[
        BasicFieldMapping,
        BasicObjectMapping,
        FieldsMapping,
        NestedObjectMapping,
        CompletionMapping,
        CompletionMappingWithoutPath,
        NestedFieldMapping,
    ],
    Field(discriminator="kind"),
]


class IndexMapping(DslNode):
    """Properties of one mapping type."""

    fields: dict[str, FieldMapping]

    enable_all_field: bool | None = None
    """Toggle the ``_all`` field."""

    strict_mapping: bool = False
    """Reject documents with unmapped fields."""


class Mapping(DslNode):
    """Mapping of one type, keyed by the type name."""

    tpe: Type
    mapping: IndexMapping


for _model in (
    BasicFieldMapping,
    BasicObjectMapping,
    FieldsMapping,
    NestedObjectMapping,
    IndexMapping,
    Mapping,
):
    _model.model_rebuild()
