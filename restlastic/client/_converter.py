from __future__ import annotations

import json
from typing import Any

from restlastic.core.exceptions import BadRequestError
from restlastic.dsl import (
    BulkDelete,
    CreateIndex,
    EsVersion,
    Index,
    IndexSetting,
    Mapping,
    QueryRoot,
    Renderer,
    ScriptSource,
    Scroll,
    Sort,
    Type,
)

from ._models import (
    AddScriptResponse,
    DeleteResponse,
    RawSearchResponse,
    ScriptFound,
    ScriptLookup,
    ScriptNotFound,
    ScrollId,
    ScrollPage,
    SearchHit,
    SearchResponse,
)


class OperationConverter:
    """Builds transport arguments for client operations."""

    version: EsVersion
    renderer: Renderer
    default_result_window: str

    def __init__(self, version: EsVersion, default_result_window: str):
        self.version = version
        self.renderer = Renderer(version)
        self.default_result_window = default_result_window

    def convert_delete_by_query(
        self,
        indices: Index | list[Index],
        tpe: Type,
        query: QueryRoot,
        wait_for_completion: bool,
        proceed_on_conflicts: bool,
        refresh_after_deletion: bool,
        use_auto_slices: bool,
    ) -> dict:
        params = {"wait_for_completion": str(wait_for_completion).lower()}
        if proceed_on_conflicts:
            params["conflicts"] = "proceed"
        if refresh_after_deletion:
            params["refresh"] = "true"
        if use_auto_slices:
            params["slices"] = "auto"
        return {
            "method": "POST",
            "path": f"/{self._join(indices)}/{tpe.name}/_delete_by_query",
            "params": params,
            "body": self.renderer.render(query),
        }

    def convert_create_index(
        self,
        index: Index,
        settings: IndexSetting | None = None,
        mappings: list[Mapping] | None = None,
    ) -> dict:
        op = CreateIndex(settings=settings, mappings=mappings or [])
        return {
            "method": "PUT",
            "path": f"/{index.name}",
            "body": self.renderer.render(op),
        }

    def convert_put_mapping(
        self,
        index: Index,
        mapping: Mapping,
    ) -> dict:
        return {
            "method": "PUT",
            "path": f"/{index.name}/_mapping/{mapping.tpe.name}",
            "body": self.renderer.render(mapping),
        }

    def convert_start_scroll(
        self,
        indices: Index | list[Index],
        tpe: Type,
        query: QueryRoot,
        result_window: str | None = None,
        from_: int | None = None,
        size: int | None = None,
        preference: str | None = None,
    ) -> dict:
        params = {"scroll": result_window or self.default_result_window}
        if size is not None:
            params["size"] = str(size)
        if preference is not None:
            params["preference"] = preference
        if from_ is not None:
            query = query.model_copy(update={"from_": from_})
        # Scrolls sorted by _doc skip scoring and sorting
        if self.version == EsVersion.V6 and not query.sort:
            query = query.model_copy(update={"sort": [Sort(field="_doc")]})
        return {
            "method": "POST",
            "path": f"/{self._join(indices)}/{tpe.name}/_search",
            "params": params,
            "body": self.renderer.render(query),
        }

    def convert_scroll(
        self,
        scroll_id: ScrollId,
        result_window: str | None = None,
    ) -> dict:
        scroll = Scroll(
            scroll_id=scroll_id.id,
            window=result_window or self.default_result_window,
        )
        return {
            "method": "POST",
            "path": "/_search/scroll",
            "body": self.renderer.render(scroll),
        }

    def convert_bulk_delete(
        self,
        index: Index,
        tpe: Type,
        ids: list[str],
    ) -> dict:
        op = BulkDelete(index=index.name, tpe=tpe.name, ids=ids)
        return {
            "method": "POST",
            "path": "/_bulk",
            "body": self.renderer.render(op),
        }

    def convert_script(
        self,
        method: str,
        script_id: str,
        lang: str = "",
        source: ScriptSource | None = None,
    ) -> dict:
        if self.version == EsVersion.V2:
            lang = source.lang if source is not None else lang
            if not lang:
                raise BadRequestError("Script language required for 2.x")
            path = f"/_scripts/{lang}/{script_id}"
        else:
            path = f"/_scripts/{script_id}"
        args: dict[str, Any] = {"method": method, "path": path}
        if source is not None:
            args["body"] = self.renderer.render(source)
        return args

    @staticmethod
    def _join(indices: Index | list[Index]) -> str:
        if isinstance(indices, Index):
            return indices.name
        if not indices:
            raise BadRequestError("At least one index must be specified")
        return ",".join(index.name for index in indices)


class ResultConverter:
    """Parses response bodies into typed results."""

    def convert_scroll_page(self, body: dict[str, Any]) -> ScrollPage:
        hits = [
            SearchHit(
                id=hit["_id"],
                index=hit.get("_index"),
                type=hit.get("_type"),
                score=hit.get("_score"),
                source=hit.get("_source"),
            )
            for hit in body.get("hits", {}).get("hits", [])
        ]
        return ScrollPage(
            scroll_id=ScrollId(id=body["_scroll_id"]),
            response=SearchResponse(
                raw_search_response=RawSearchResponse(hits=hits),
                json_str=json.dumps(body),
            ),
        )

    def convert_bulk_delete(
        self, body: dict[str, Any]
    ) -> dict[str, DeleteResponse]:
        results: dict[str, DeleteResponse] = {}
        for item in body.get("items", []):
            entry = item.get("delete", {})
            error = entry.get("error")
            result = entry.get("result")
            if result is None and error is None:
                # 2.x reports found instead of result
                result = "deleted" if entry.get("found", True) else "not_found"
            results[entry["_id"]] = DeleteResponse(
                status=entry.get("status", 200),
                result=result,
                error=error,
            )
        return results

    def convert_get_script(
        self, script_id: str, body: dict[str, Any]
    ) -> ScriptLookup:
        if not body.get("found", True) or "script" not in body:
            return ScriptNotFound(id=script_id)
        return ScriptFound(id=body.get("_id", script_id), script=body["script"])

    def convert_add_script(self, body: Any) -> AddScriptResponse:
        acknowledged = True
        if isinstance(body, dict):
            acknowledged = bool(body.get("acknowledged", True))
        return AddScriptResponse(acknowledged=acknowledged)
