from __future__ import annotations

from enum import Enum

from restlastic.core import DslNode


class EsVersion(str, Enum):
    """Wire protocol generation.

    Attributes:
        V2: Elasticsearch 2.x.
        V6: Elasticsearch 6.x.
    """

    V2 = "v2"
    V6 = "v6"


class Index(DslNode):
    """Index name."""

    name: str

    def __str__(self) -> str:
        return self.name


class Type(DslNode):
    """Mapping type name within an index."""

    name: str

    def __str__(self) -> str:
        return self.name
