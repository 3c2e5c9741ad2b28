# type: ignore
from types import SimpleNamespace

import pytest
from elastic_transport import ConnectionTimeout

from restlastic.client import (
    ClientConfig,
    ElasticTransport,
    RestlasticSearchClient,
    TransportFailure,
)
from restlastic.dsl import EsVersion


class StubNodeTransport:
    def __init__(self, status: int = 200, body=None, error=None):
        self.status = status
        self.body = body
        self.error = error
        self.calls = []

    async def perform_request(self, method, target, **kwargs):
        self.calls.append({"method": method, "target": target, **kwargs})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            meta=SimpleNamespace(status=self.status), body=self.body
        )


class StubClient:
    def __init__(self, transport: StubNodeTransport):
        self.transport = transport
        self.closed = False

    async def close(self):
        self.closed = True


def get_transport(**kwargs) -> tuple[ElasticTransport, StubNodeTransport]:
    node = StubNodeTransport(**kwargs)
    transport = ElasticTransport(
        hosts="http://localhost:9200",
        request_timeout=5.0,
        client=StubClient(node),
    )
    return transport, node


@pytest.mark.asyncio
async def test_perform():
    transport, node = get_transport(body={"acknowledged": True})
    resp = await transport.perform(
        "POST",
        "/products/product/_search",
        params={"scroll": "1m", "size": "2"},
        body={"query": {"match_all": {}}},
    )
    assert resp.ok
    assert resp.body == {"acknowledged": True}
    [call] = node.calls
    assert call["method"] == "POST"
    assert call["target"] == "/products/product/_search?scroll=1m&size=2"
    assert call["body"] == {"query": {"match_all": {}}}
    assert call["headers"]["content-type"] == "application/json"
    assert call["request_timeout"] == 5.0
    assert call["max_retries"] == 0


@pytest.mark.asyncio
async def test_perform_bulk_body():
    transport, node = get_transport(body={"items": []})
    await transport.perform("POST", "/_bulk", body=[{"delete": {"_id": "1"}}])
    assert node.calls[0]["target"] == "/_bulk"
    assert node.calls[0]["headers"]["content-type"] == "application/x-ndjson"


@pytest.mark.asyncio
async def test_perform_error_status_is_returned():
    transport, _ = get_transport(status=404, body={"found": False})
    resp = await transport.perform("GET", "/_scripts/missing")
    assert not resp.ok
    assert resp.status == 404
    assert resp.body == {"found": False}


@pytest.mark.asyncio
async def test_perform_timeout():
    transport, _ = get_transport(error=ConnectionTimeout("timed out"))
    with pytest.raises(TransportFailure) as e:
        await transport.perform("GET", "/_scripts/counter")
    assert e.value.status_code == 503
    assert isinstance(e.value.__cause__, ConnectionTimeout)


@pytest.mark.asyncio
async def test_close():
    transport, _ = get_transport()
    client = transport.aclient
    await transport.close()
    assert client.closed
    # closing twice is a no-op
    await transport.close()


def test_client_params():
    transport = ElasticTransport(
        hosts=["http://es1:9200", "http://es2:9200"],
        api_key=["id", "key"],
        verify_certs=False,
        nparams={"http_compress": True},
    )
    assert transport._get_client_params() == {
        "hosts": ["http://es1:9200", "http://es2:9200"],
        "request_timeout": 30.0,
        "api_key": ("id", "key"),
        "verify_certs": False,
        "http_compress": True,
    }


def test_from_config():
    config = ClientConfig(
        hosts="http://writer:9200",
        search_hosts="http://reader:9200",
        version=EsVersion.V2,
        default_result_window="2m",
    )
    client = RestlasticSearchClient.from_config(config)
    assert client.version == EsVersion.V2
    assert client.default_result_window == "2m"
    assert client.transport.hosts == "http://writer:9200"
    assert client.search_transport.hosts == "http://reader:9200"

    client = RestlasticSearchClient.from_config(ClientConfig())
    assert client.version == EsVersion.V6
    assert client.default_result_window == "1m"
    assert client.search_transport is client.transport
    assert client.transport.request_timeout == 30.0
