"""
Transport adapter.

Requests go through the transport of an ``AsyncElasticsearch`` client so
that connection pooling, TLS and authentication are handled there, while
error statuses come back as plain responses instead of exceptions.
"""

from __future__ import annotations

from typing import Any, Protocol
from urllib.parse import urlencode

from elastic_transport import TransportError
from elasticsearch import AsyncElasticsearch

from restlastic.core.exceptions import TransportFailure

from ._models import ClientConfig, RawJsonResponse

JSON = "application/json"
NDJSON = "application/x-ndjson"


class Transport(Protocol):
    async def perform(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        body: Any = None,
    ) -> RawJsonResponse:
        """Send one request.

        Error statuses are returned, network errors raise
        ``TransportFailure``.
        """
        ...

    async def close(self) -> None: ...


class ElasticTransport:
    hosts: str | list[str] | dict[str, str | int]
    api_key: str | list[str] | None
    basic_auth: str | list[str] | None
    bearer_auth: str | None
    headers: dict[str, str] | None
    verify_certs: bool | None
    ca_certs: str | None
    request_timeout: float
    nparams: dict[str, Any]

    _aclient: AsyncElasticsearch
    _ainit: bool

    def __init__(
        self,
        hosts: str | list[str] | dict[str, str | int],
        api_key: str | list[str] | None = None,
        basic_auth: str | list[str] | None = None,
        bearer_auth: str | None = None,
        headers: dict[str, str] | None = None,
        verify_certs: bool | None = None,
        ca_certs: str | None = None,
        request_timeout: float = 30.0,
        nparams: dict[str, Any] | None = None,
        client: AsyncElasticsearch | None = None,
    ):
        """Initialize.

        Args:
            hosts:
                Elasticsearch hosts.
            api_key:
                Elasticsearch api key.
            basic_auth:
                Elasticsearch basic auth.
            bearer_auth:
                Elasticsearch bearer auth.
            headers:
                Extra http headers.
            verify_certs:
                Verify TLS certificates.
            ca_certs:
                CA bundle path.
            request_timeout:
                Timeout of every request in seconds.
            nparams:
                Native parameters to the Elasticsearch client.
            client:
                Prebuilt client. Built lazily from the other
                parameters when not given.
        """
        self.hosts = hosts
        self.api_key = api_key
        self.basic_auth = basic_auth
        self.bearer_auth = bearer_auth
        self.headers = headers
        self.verify_certs = verify_certs
        self.ca_certs = ca_certs
        self.request_timeout = request_timeout
        self.nparams = nparams or {}
        self._ainit = False
        if client is not None:
            self._aclient = client
            self._ainit = True

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        hosts: str | list[str] | dict[str, str | int] | None = None,
    ) -> ElasticTransport:
        return cls(
            hosts=hosts or config.hosts,
            api_key=config.api_key,
            basic_auth=config.basic_auth,
            bearer_auth=config.bearer_auth,
            headers=config.headers,
            verify_certs=config.verify_certs,
            ca_certs=config.ca_certs,
            request_timeout=config.request_timeout,
            nparams=config.nparams,
        )

    @property
    def aclient(self) -> AsyncElasticsearch:
        if not self._ainit:
            self._aclient = AsyncElasticsearch(**self._get_client_params())
            self._ainit = True
        return self._aclient

    def _get_client_params(self) -> dict:
        def _add_if_not_none(key, value):
            return {key: value} if value is not None else {}

        def _convert_if_list(value):
            return tuple(value) if isinstance(value, list) else value

        args = {
            "hosts": self.hosts,
            "request_timeout": self.request_timeout,
            **_add_if_not_none("api_key", _convert_if_list(self.api_key)),
            **_add_if_not_none(
                "basic_auth", _convert_if_list(self.basic_auth)
            ),
            **_add_if_not_none("bearer_auth", self.bearer_auth),
            **_add_if_not_none("headers", self.headers),
            **_add_if_not_none("verify_certs", self.verify_certs),
            **_add_if_not_none("ca_certs", self.ca_certs),
        }
        args.update(self.nparams)
        return args

    async def perform(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        body: Any = None,
    ) -> RawJsonResponse:
        target = f"{path}?{urlencode(params)}" if params else path
        headers = {
            "accept": JSON,
            "content-type": NDJSON if isinstance(body, list) else JSON,
        }
        try:
            resp = await self.aclient.transport.perform_request(
                method,
                target,
                body=body,
                headers=headers,
                request_timeout=self.request_timeout,
                max_retries=0,
            )
        except TransportError as e:
            raise TransportFailure(f"{method} {path}: {e}") from e
        return RawJsonResponse(status=resp.meta.status, body=resp.body)

    async def close(self) -> None:
        if self._ainit:
            await self._aclient.close()
            self._ainit = False
