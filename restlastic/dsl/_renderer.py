"""
Rendering of query and mapping nodes into Elasticsearch JSON.

Rendering is a pure function of a node and the target protocol version.
Optional values are either emitted or left out; a key is never emitted
with a null value.
"""

from __future__ import annotations

from typing import Any

from restlastic.core import DslNode
from restlastic.core.exceptions import BadRequestError

from ._mapping import (
    BasicFieldMapping,
    BasicObjectMapping,
    CompletionMapping,
    CompletionMappingWithoutPath,
    FieldMapping,
    FieldsMapping,
    IndexMapping,
    Mapping,
    NestedFieldMapping,
    NestedObjectMapping,
)
from ._models import EsVersion
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
    QueryRoot,
    RangeQuery,
    Sort,
    TermQuery,
    TermsQuery,
    WildcardQuery,
)


def render(node: DslNode, version: EsVersion) -> Any:
    """Render a node for the given protocol version."""
    return Renderer(version).render(node)


def _set_if_not_none(d: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        d[key] = value


class Renderer:
    version: EsVersion

    def __init__(self, version: EsVersion) -> None:
        self.version = version

    def render(self, node: DslNode) -> Any:
        if isinstance(
            node,
            (
                BasicFieldMapping,
                BasicObjectMapping,
                FieldsMapping,
                NestedObjectMapping,
                CompletionMapping,
                CompletionMappingWithoutPath,
                NestedFieldMapping,
            ),
        ):
            return self.render_field_mapping(node)
        if isinstance(node, IndexMapping):
            return self.render_index_mapping(node)
        if isinstance(node, Mapping):
            return {node.tpe.name: self.render_index_mapping(node.mapping)}
        if isinstance(node, QueryRoot):
            return self.render_query_root(node)
        if isinstance(node, Sort):
            return self.render_sort(node)
        if isinstance(node, Scroll):
            return {"scroll": node.window, "scroll_id": node.scroll_id}
        if isinstance(node, ScriptSource):
            return self.render_script(node)
        if isinstance(node, IndexSetting):
            return self.render_index_setting(node)
        if isinstance(node, CreateIndex):
            return self.render_create_index(node)
        if isinstance(node, BulkDelete):
            return self.render_bulk_delete(node)
        return self.render_query(node)

    # Mappings

    def render_field_mapping(self, mapping: FieldMapping) -> dict[str, Any]:
        if isinstance(mapping, BasicFieldMapping):
            return self._render_basic_field(mapping)
        if isinstance(mapping, BasicObjectMapping):
            return {"properties": self._render_properties(mapping.fields)}
        if isinstance(mapping, FieldsMapping):
            return {"fields": self._render_properties(mapping.fields)}
        if isinstance(mapping, NestedObjectMapping):
            return {
                "type": "nested",
                "properties": self._render_properties(mapping.fields),
            }
        if isinstance(mapping, CompletionMapping):
            return self._render_completion(mapping)
        if isinstance(mapping, CompletionMappingWithoutPath):
            out = self._render_completion_base(mapping.analyzer)
            out["contexts"] = {
                name: {"type": "category"} for name in mapping.context
            }
            return out
        if isinstance(mapping, NestedFieldMapping):
            return {"type": "nested"}
        raise BadRequestError(f"Field mapping {mapping!r} not supported")

    def render_index_mapping(self, mapping: IndexMapping) -> dict[str, Any]:
        out: dict[str, Any] = {
            "properties": self._render_properties(mapping.fields)
        }
        if mapping.strict_mapping:
            out["dynamic"] = "strict"
        if mapping.enable_all_field is not None:
            out["_all"] = {"enabled": mapping.enable_all_field}
        return out

    def _render_properties(
        self, fields: dict[str, FieldMapping]
    ) -> dict[str, Any]:
        return {
            name: self.render_field_mapping(mapping)
            for name, mapping in fields.items()
        }

    def _render_basic_field(
        self, mapping: BasicFieldMapping
    ) -> dict[str, Any]:
        out: dict[str, Any] = {"type": mapping.tpe.value}
        if mapping.index is not None:
            rep = mapping.index.rep(self.version)
            if rep:
                out["index"] = rep
        _set_if_not_none(out, "analyzer", mapping.analyzer)
        if self.version == EsVersion.V6:
            _set_if_not_none(out, "normalizer", mapping.normalizer)
        _set_if_not_none(out, "search_analyzer", mapping.search_analyzer)
        if mapping.index_option is not None:
            out["index_options"] = mapping.index_option.value
        _set_if_not_none(out, "ignore_above", mapping.ignore_above)
        if mapping.fields is not None:
            out.update(self.render_field_mapping(mapping.fields))
        _set_if_not_none(out, "fielddata", mapping.fielddata)
        return out

    @staticmethod
    def _render_completion_base(analyzer: str) -> dict[str, Any]:
        return {
            "type": "completion",
            "analyzer": analyzer,
            "search_analyzer": analyzer,
        }

    def _render_completion(self, mapping: CompletionMapping) -> dict[str, Any]:
        out = self._render_completion_base(mapping.analyzer)
        if self.version == EsVersion.V6:
            out["contexts"] = [
                {"type": "category", "path": context.path, "name": name}
                for name, context in mapping.context.items()
            ]
        else:
            out["context"] = {
                name: {"type": "category", "path": context.path}
                for name, context in mapping.context.items()
            }
        return out

    # Queries

    def render_query_root(self, root: QueryRoot) -> dict[str, Any]:
        out: dict[str, Any] = {"query": self.render_query(root.query)}
        _set_if_not_none(out, "from", root.from_)
        _set_if_not_none(out, "size", root.size)
        if root.sort:
            out["sort"] = [self.render_sort(s) for s in root.sort]
        source = self._render_source_filter(
            root.source_includes, root.source_excludes
        )
        _set_if_not_none(out, "_source", source)
        _set_if_not_none(out, "timeout", root.timeout)
        _set_if_not_none(out, "terminate_after", root.terminate_after)
        return out

    def _render_source_filter(
        self,
        includes: list[str] | None,
        excludes: list[str] | None,
    ) -> dict[str, Any] | None:
        if includes is None and excludes is None:
            return None
        # 2.x spells the keys in the singular
        suffix = "" if self.version == EsVersion.V2 else "s"
        source: dict[str, Any] = {}
        _set_if_not_none(source, f"include{suffix}", includes)
        _set_if_not_none(source, f"exclude{suffix}", excludes)
        return source

    @staticmethod
    def render_sort(sort: Sort) -> Any:
        if sort.order is None:
            return sort.field
        return {sort.field: {"order": sort.order.value}}

    def render_query(self, query: Any) -> dict[str, Any]:
        if isinstance(query, MatchAll):
            return {"match_all": {}}
        if isinstance(query, TermQuery):
            if query.boost is None:
                return {"term": {query.field: query.value}}
            return {
                "term": {
                    query.field: {"value": query.value, "boost": query.boost}
                }
            }
        if isinstance(query, TermsQuery):
            return {"terms": {query.field: list(query.values)}}
        if isinstance(query, MatchQuery):
            match: dict[str, Any] = {"query": query.query}
            _set_if_not_none(match, "operator", query.operator)
            _set_if_not_none(match, "analyzer", query.analyzer)
            return {"match": {query.field: match}}
        if isinstance(query, PrefixQuery):
            return {"prefix": {query.field: query.prefix}}
        if isinstance(query, WildcardQuery):
            return {"wildcard": {query.field: query.pattern}}
        if isinstance(query, RangeQuery):
            bounds: dict[str, Any] = {}
            for key in ("gt", "gte", "lt", "lte", "format"):
                _set_if_not_none(bounds, key, getattr(query, key))
            return {"range": {query.field: bounds}}
        if isinstance(query, ExistsQuery):
            return {"exists": {"field": query.field}}
        if isinstance(query, MissingQuery):
            if self.version == EsVersion.V2:
                return {"missing": {"field": query.field}}
            return {
                "bool": {"must_not": [{"exists": {"field": query.field}}]}
            }
        if isinstance(query, IdsQuery):
            ids: dict[str, Any] = {"values": list(query.values)}
            if self.version == EsVersion.V2 and query.types:
                ids["type"] = list(query.types)
            return {"ids": ids}
        if isinstance(query, BoolQuery):
            return {"bool": self._render_bool(query)}
        if isinstance(query, NestedQuery):
            nested: dict[str, Any] = {
                "path": query.path,
                "query": self.render_query(query.query),
            }
            _set_if_not_none(nested, "score_mode", query.score_mode)
            return {"nested": nested}
        if isinstance(query, ConstantScoreQuery):
            constant: dict[str, Any] = {
                "filter": self.render_query(query.filter)
            }
            _set_if_not_none(constant, "boost", query.boost)
            return {"constant_score": constant}
        raise BadRequestError(f"Node {query!r} not supported")

    def _render_bool(self, query: BoolQuery) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for occur in ("must", "filter", "should", "must_not"):
            clauses = getattr(query, occur)
            if clauses:
                out[occur] = [self.render_query(c) for c in clauses]
        _set_if_not_none(
            out, "minimum_should_match", query.minimum_should_match
        )
        return out

    # Operations

    def render_script(self, script: ScriptSource) -> dict[str, Any]:
        if self.version == EsVersion.V2:
            # lang is part of the 2.x path
            return {"script": script.source}
        body: dict[str, Any] = {"lang": script.lang, "source": script.source}
        _set_if_not_none(body, "params", script.params)
        return {"script": body}

    @staticmethod
    def render_index_setting(setting: IndexSetting) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _set_if_not_none(out, "number_of_shards", setting.number_of_shards)
        _set_if_not_none(
            out, "number_of_replicas", setting.number_of_replicas
        )
        _set_if_not_none(out, "refresh_interval", setting.refresh_interval)
        _set_if_not_none(out, "analysis", setting.analysis)
        return out

    def render_create_index(self, op: CreateIndex) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if op.settings is not None:
            out["settings"] = self.render_index_setting(op.settings)
        if op.mappings:
            mappings: dict[str, Any] = {}
            for mapping in op.mappings:
                mappings[mapping.tpe.name] = self.render_index_mapping(
                    mapping.mapping
                )
            out["mappings"] = mappings
        return out

    @staticmethod
    def render_bulk_delete(op: BulkDelete) -> list[dict[str, Any]]:
        return [
            {"delete": {"_index": op.index, "_type": op.tpe, "_id": id}}
            for id in op.ids
        ]
