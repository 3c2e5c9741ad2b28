"""
Elasticsearch REST client for the 2.x and 6.x protocols.

Request bodies are rendered from the query and mapping language for the
protocol version the client is built with. Scroll traversals and the
delete by query built on them run page by page: the next page is only
requested once the current one has been processed.
"""

from __future__ import annotations

import logging
from contextlib import aclosing
from typing import Any, AsyncIterator

from restlastic.core import Response, run_sync
from restlastic.core.exceptions import (
    ElasticErrorResponse,
    IndexAlreadyExistsError,
)
from restlastic.dsl import (
    EsVersion,
    Index,
    IndexSetting,
    Mapping,
    QueryRoot,
    ScriptSource,
    Type,
)

from ._converter import OperationConverter, ResultConverter
from ._models import (
    AddScriptResponse,
    ClientConfig,
    DeleteResponse,
    RawJsonResponse,
    ScriptLookup,
    ScriptNotFound,
    ScrollId,
    ScrollPage,
)
from ._transport import ElasticTransport, Transport

__all__ = ["RestlasticSearchClient"]

logger = logging.getLogger(__name__)

INDEX_ALREADY_EXISTS = {
    EsVersion.V2: "index_already_exists_exception",
    EsVersion.V6: "resource_already_exists_exception",
}


def _native(body: Any) -> dict[str, Any] | None:
    return body if isinstance(body, dict) else None


class RestlasticSearchClient:
    version: EsVersion
    transport: Transport
    search_transport: Transport
    default_result_window: str

    _op_converter: OperationConverter
    _result_converter: ResultConverter

    def __init__(
        self,
        transport: Transport,
        version: EsVersion = EsVersion.V6,
        search_transport: Transport | None = None,
        default_result_window: str = "1m",
    ):
        """Initialize.

        Args:
            transport:
                Transport for index, delete and script requests.
            version:
                Protocol version of the cluster.
            search_transport:
                Transport for search and scroll requests. Keeps slow
                reads from holding the connections writes need.
                Defaults to ``transport``.
            default_result_window:
                Scroll keep alive used when a call does not give one.
        """
        self.version = version
        self.transport = transport
        self.search_transport = search_transport or transport
        self.default_result_window = default_result_window
        self._op_converter = OperationConverter(
            version=version, default_result_window=default_result_window
        )
        self._result_converter = ResultConverter()

    @classmethod
    def from_config(cls, config: ClientConfig) -> RestlasticSearchClient:
        search_transport = None
        if config.search_hosts:
            search_transport = ElasticTransport.from_config(
                config, hosts=config.search_hosts
            )
        return cls(
            transport=ElasticTransport.from_config(config),
            version=config.version,
            search_transport=search_transport,
            default_result_window=config.default_result_window,
        )

    async def _arun(self, args: dict, search: bool = False) -> RawJsonResponse:
        transport = self.search_transport if search else self.transport
        logger.debug("%s %s %s", args["method"], args["path"], args.get("params"))
        resp = await transport.perform(**args)
        if not resp.ok:
            raise ElasticErrorResponse(resp.body, resp.status)
        return resp

    async def acreate_index(
        self,
        index: Index,
        settings: IndexSetting | None = None,
        mappings: list[Mapping] | None = None,
    ) -> Response[RawJsonResponse]:
        """Create an index.

        Raises:
            IndexAlreadyExistsError: The index exists.
        """
        args = self._op_converter.convert_create_index(
            index=index, settings=settings, mappings=mappings
        )
        try:
            resp = await self._arun(args)
        except ElasticErrorResponse as e:
            if e.contains(INDEX_ALREADY_EXISTS[self.version]):
                raise IndexAlreadyExistsError(index.name, e.message) from e
            raise
        return Response(result=resp, native=_native(resp.body))

    async def aput_mapping(
        self,
        index: Index,
        mapping: Mapping,
    ) -> Response[RawJsonResponse]:
        args = self._op_converter.convert_put_mapping(
            index=index, mapping=mapping
        )
        resp = await self._arun(args)
        return Response(result=resp, native=_native(resp.body))

    async def adelete_by_query(
        self,
        indices: Index | list[Index],
        tpe: Type,
        query: QueryRoot,
        wait_for_completion: bool,
        proceed_on_conflicts: bool,
        refresh_after_deletion: bool,
        use_auto_slices: bool,
    ) -> Response[RawJsonResponse]:
        """Delete matching documents in one server side call.

        Args:
            indices:
                Index or indices to delete from.
            tpe:
                Mapping type.
            query:
                Documents to delete.
            wait_for_completion:
                Block until done, otherwise the body holds a task id.
            proceed_on_conflicts:
                Count version conflicts instead of aborting.
            refresh_after_deletion:
                Refresh the indices once done.
            use_auto_slices:
                Let the server parallelize the deletion.
        """
        args = self._op_converter.convert_delete_by_query(
            indices=indices,
            tpe=tpe,
            query=query,
            wait_for_completion=wait_for_completion,
            proceed_on_conflicts=proceed_on_conflicts,
            refresh_after_deletion=refresh_after_deletion,
            use_auto_slices=use_auto_slices,
        )
        resp = await self._arun(args)
        return Response(result=resp, native=_native(resp.body))

    async def astart_scroll_request(
        self,
        indices: Index | list[Index],
        tpe: Type,
        query: QueryRoot,
        result_window: str | None = None,
        from_: int | None = None,
        size: int | None = None,
        preference: str | None = None,
    ) -> Response[ScrollPage]:
        """Open a scroll and return its first page."""
        args = self._op_converter.convert_start_scroll(
            indices=indices,
            tpe=tpe,
            query=query,
            result_window=result_window,
            from_=from_,
            size=size,
            preference=preference,
        )
        resp = await self._arun(args, search=True)
        page = self._result_converter.convert_scroll_page(resp.body)
        return Response(result=page, native=_native(resp.body))

    async def ascroll(
        self,
        scroll_id: ScrollId,
        result_window: str | None = None,
    ) -> Response[ScrollPage]:
        """Fetch the page after the one that returned ``scroll_id``."""
        args = self._op_converter.convert_scroll(
            scroll_id=scroll_id, result_window=result_window
        )
        resp = await self._arun(args, search=True)
        page = self._result_converter.convert_scroll_page(resp.body)
        return Response(result=page, native=_native(resp.body))

    async def aiter_scroll(
        self,
        indices: Index | list[Index],
        tpe: Type,
        query: QueryRoot,
        result_window: str | None = None,
        size: int | None = None,
        preference: str | None = None,
    ) -> AsyncIterator[ScrollPage]:
        """Iterate over the pages of a scroll.

        The last page yielded is the first empty one. Each page is
        requested with the token of the page before it, and only when
        the consumer asks for it.
        """
        page = (
            await self.astart_scroll_request(
                indices=indices,
                tpe=tpe,
                query=query,
                result_window=result_window,
                size=size,
                preference=preference,
            )
        ).result
        while True:
            yield page
            if page.empty:
                return
            page = (
                await self.ascroll(page.scroll_id, result_window=result_window)
            ).result

    async def abulk_delete(
        self,
        index: Index,
        tpe: Type,
        ids: list[str],
    ) -> Response[dict[str, DeleteResponse]]:
        """Delete documents by id in one bulk request.

        Per document failures are reported in the result and do not
        raise.
        """
        if not ids:
            return Response(result={})
        args = self._op_converter.convert_bulk_delete(
            index=index, tpe=tpe, ids=ids
        )
        resp = await self._arun(args)
        result = self._result_converter.convert_bulk_delete(resp.body)
        for id, outcome in result.items():
            if outcome.error is not None:
                logger.warning(
                    "Deleting %s from %s failed: %s",
                    id,
                    index.name,
                    outcome.error,
                )
        return Response(result=result, native=_native(resp.body))

    async def ascroll_delete(
        self,
        index: Index,
        tpe: Type,
        query: QueryRoot,
        result_window: str | None = None,
        size: int | None = None,
    ) -> Response[dict[str, DeleteResponse]]:
        """Delete matching documents page by page over a scroll.

        Returns:
            Outcome per document id, in the order documents were seen.
        """
        deleted: dict[str, DeleteResponse] = {}
        pages = 0
        pages_iter = self.aiter_scroll(
            indices=index,
            tpe=tpe,
            query=query,
            result_window=result_window,
            size=size,
        )
        async with aclosing(pages_iter) as scroll:
            async for page in scroll:
                pages += 1
                if page.empty:
                    break
                delta = (
                    await self.abulk_delete(index, tpe, page.response.ids)
                ).result
                deleted.update(delta)
        logger.info(
            "Scroll delete on %s finished after %d pages, %d documents",
            index.name,
            pages,
            len(deleted),
        )
        return Response(result=deleted)

    async def aget_script(
        self,
        script_id: str,
        lang: str = "",
    ) -> Response[ScriptLookup]:
        """Get a stored script. A missing script is not an error."""
        args = self._op_converter.convert_script(
            "GET", script_id=script_id, lang=lang
        )
        try:
            resp = await self._arun(args)
        except ElasticErrorResponse as e:
            if e.status == 404:
                return Response(result=ScriptNotFound(id=script_id))
            raise
        result = self._result_converter.convert_get_script(
            script_id, resp.body
        )
        return Response(result=result, native=_native(resp.body))

    async def aadd_script(
        self,
        script_id: str,
        source: ScriptSource,
    ) -> Response[AddScriptResponse]:
        """Create or replace a stored script."""
        args = self._op_converter.convert_script(
            "POST", script_id=script_id, source=source
        )
        resp = await self._arun(args)
        result = self._result_converter.convert_add_script(resp.body)
        return Response(result=result, native=_native(resp.body))

    async def adelete_script(
        self,
        script_id: str,
        lang: str = "",
    ) -> Response[bool]:
        """Delete a stored script.

        Returns:
            False when there was no such script.
        """
        args = self._op_converter.convert_script(
            "DELETE", script_id=script_id, lang=lang
        )
        try:
            resp = await self._arun(args)
        except ElasticErrorResponse as e:
            if e.status == 404:
                return Response(result=False)
            raise
        return Response(result=True, native=_native(resp.body))

    async def aclose(self) -> None:
        await self.transport.close()
        if self.search_transport is not self.transport:
            await self.search_transport.close()

    def create_index(
        self,
        index: Index,
        settings: IndexSetting | None = None,
        mappings: list[Mapping] | None = None,
    ) -> Response[RawJsonResponse]:
        return run_sync(
            self.acreate_index, index, settings=settings, mappings=mappings
        )

    def put_mapping(
        self,
        index: Index,
        mapping: Mapping,
    ) -> Response[RawJsonResponse]:
        return run_sync(self.aput_mapping, index, mapping)

    def delete_by_query(
        self,
        indices: Index | list[Index],
        tpe: Type,
        query: QueryRoot,
        wait_for_completion: bool,
        proceed_on_conflicts: bool,
        refresh_after_deletion: bool,
        use_auto_slices: bool,
    ) -> Response[RawJsonResponse]:
        return run_sync(
            self.adelete_by_query,
            indices,
            tpe,
            query,
            wait_for_completion=wait_for_completion,
            proceed_on_conflicts=proceed_on_conflicts,
            refresh_after_deletion=refresh_after_deletion,
            use_auto_slices=use_auto_slices,
        )

    def start_scroll_request(
        self,
        indices: Index | list[Index],
        tpe: Type,
        query: QueryRoot,
        result_window: str | None = None,
        from_: int | None = None,
        size: int | None = None,
        preference: str | None = None,
    ) -> Response[ScrollPage]:
        return run_sync(
            self.astart_scroll_request,
            indices,
            tpe,
            query,
            result_window=result_window,
            from_=from_,
            size=size,
            preference=preference,
        )

    def scroll(
        self,
        scroll_id: ScrollId,
        result_window: str | None = None,
    ) -> Response[ScrollPage]:
        return run_sync(self.ascroll, scroll_id, result_window=result_window)

    def bulk_delete(
        self,
        index: Index,
        tpe: Type,
        ids: list[str],
    ) -> Response[dict[str, DeleteResponse]]:
        return run_sync(self.abulk_delete, index, tpe, ids)

    def scroll_delete(
        self,
        index: Index,
        tpe: Type,
        query: QueryRoot,
        result_window: str | None = None,
        size: int | None = None,
    ) -> Response[dict[str, DeleteResponse]]:
        return run_sync(
            self.ascroll_delete,
            index,
            tpe,
            query,
            result_window=result_window,
            size=size,
        )

    def get_script(
        self,
        script_id: str,
        lang: str = "",
    ) -> Response[ScriptLookup]:
        return run_sync(self.aget_script, script_id, lang=lang)

    def add_script(
        self,
        script_id: str,
        source: ScriptSource,
    ) -> Response[AddScriptResponse]:
        return run_sync(self.aadd_script, script_id, source)

    def delete_script(
        self,
        script_id: str,
        lang: str = "",
    ) -> Response[bool]:
        return run_sync(self.adelete_script, script_id, lang=lang)

    def close(self) -> None:
        run_sync(self.aclose)
