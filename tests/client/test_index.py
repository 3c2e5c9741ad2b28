# type: ignore
import pytest

from restlastic.client import (
    ConflictError,
    ElasticErrorResponse,
    IndexAlreadyExistsError,
    RestlasticSearchClient,
)
from restlastic.dsl import (
    BasicFieldMapping,
    EsVersion,
    FieldType,
    Index,
    IndexMapping,
    IndexSetting,
    IndexType,
    Mapping,
    Type,
)

from ._fake_engine import FakeEngine
from ._providers import versions
from ._sync_and_async_client import SearchClientSyncAndAsyncClient

index = Index(name="products")
mapping = Mapping(
    tpe=Type(name="product"),
    mapping=IndexMapping(
        fields={
            "sku": BasicFieldMapping(
                tpe=FieldType.KEYWORD, index=IndexType.NOT_ANALYZED
            ),
        },
        strict_mapping=True,
    ),
)


@pytest.mark.asyncio
@pytest.mark.parametrize("version", versions)
@pytest.mark.parametrize("async_call", [False, True])
async def test_create_index(version: EsVersion, async_call: bool):
    client = SearchClientSyncAndAsyncClient(version, async_call)

    response = await client.create_index(
        index=index,
        settings=IndexSetting(number_of_shards=1, number_of_replicas=0),
        mappings=[mapping],
    )
    assert response.result.ok
    assert response.native == {"acknowledged": True}
    request = client.engine.requests[0]
    assert request["method"] == "PUT"
    assert request["path"] == "/products"
    assert request["body"]["settings"] == {
        "number_of_shards": 1,
        "number_of_replicas": 0,
    }
    index_rep = "not_analyzed" if version == EsVersion.V2 else "true"
    assert request["body"]["mappings"] == {
        "product": {
            "properties": {"sku": {"type": "keyword", "index": index_rep}},
            "dynamic": "strict",
        }
    }

    # create when index exists
    with pytest.raises(IndexAlreadyExistsError) as e:
        await client.create_index(index=index)
    assert e.value.index == "products"
    assert isinstance(e.value, ConflictError)
    assert e.value.status_code == 409
    assert isinstance(e.value.__cause__, ElasticErrorResponse)


@pytest.mark.asyncio
async def test_create_index_other_error_propagates():
    # a 6.x cluster answering a client configured for 2.x
    engine = FakeEngine(version=EsVersion.V6)
    engine.add_docs(index.name, {})
    client = RestlasticSearchClient(transport=engine, version=EsVersion.V2)

    with pytest.raises(ElasticErrorResponse) as e:
        await client.acreate_index(index)
    assert not isinstance(e.value, IndexAlreadyExistsError)
    assert e.value.status == 400
    assert e.value.contains("resource_already_exists_exception")


@pytest.mark.asyncio
@pytest.mark.parametrize("version", versions)
@pytest.mark.parametrize("async_call", [False, True])
async def test_put_mapping(version: EsVersion, async_call: bool):
    client = SearchClientSyncAndAsyncClient(version, async_call)

    # put when index doesn't exist
    with pytest.raises(ElasticErrorResponse) as e:
        await client.put_mapping(index=index, mapping=mapping)
    assert e.value.status == 404

    await client.create_index(index=index)
    response = await client.put_mapping(index=index, mapping=mapping)
    assert response.result.ok
    request = client.engine.requests[-1]
    assert request["method"] == "PUT"
    assert request["path"] == "/products/_mapping/product"
    assert client.engine.mappings["products"]["product"]["dynamic"] == (
        "strict"
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("async_call", [False, True])
async def test_close(async_call: bool):
    client = SearchClientSyncAndAsyncClient(EsVersion.V6, async_call)
    await client.close()
    assert client.engine.closed
