from __future__ import annotations

from typing import Any

from restlastic.core import DslNode

from ._mapping import Mapping


class Scroll(DslNode):
    """Scroll continuation body."""

    scroll_id: str
    window: str


class ScriptSource(DslNode):
    """Stored script.

    ``lang`` defaults to painless, which 2.x clusters do not have; give
    the language explicitly (e.g. ``groovy``) when talking to 2.x, where
    it is part of the script path.
    """

    source: str
    lang: str = "painless"
    params: dict[str, Any] | None = None


class IndexSetting(DslNode):
    number_of_shards: int | None = None
    number_of_replicas: int | None = None
    refresh_interval: str | None = None
    analysis: dict[str, Any] | None = None
    """Native analysis block (analyzers, normalizers, filters)."""


class CreateIndex(DslNode):
    """Body of an index creation request."""

    settings: IndexSetting | None = None
    mappings: list[Mapping] = []


class BulkDelete(DslNode):
    """Bulk request deleting a set of documents."""

    index: str
    tpe: str
    ids: list[str]
