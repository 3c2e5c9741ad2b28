import pytest
from pydantic import ValidationError

from restlastic.dsl import (
    BadRequestError,
    BoolQuery,
    BulkDelete,
    ConstantScoreQuery,
    CreateIndex,
    EsVersion,
    ExistsQuery,
    IdsQuery,
    Index,
    IndexSetting,
    MatchAll,
    MatchQuery,
    MissingQuery,
    NestedQuery,
    PrefixQuery,
    QueryRoot,
    RangeQuery,
    Renderer,
    ScriptSource,
    Scroll,
    Sort,
    SortOrder,
    TermQuery,
    TermsQuery,
    WildcardQuery,
    render,
)

versions = [EsVersion.V2, EsVersion.V6]


@pytest.mark.parametrize("version", versions)
@pytest.mark.parametrize(
    "query,expected",
    [
        (MatchAll(), {"match_all": {}}),
        (TermQuery(field="sku", value="a1"), {"term": {"sku": "a1"}}),
        (
            TermQuery(field="sku", value="a1", boost=2.0),
            {"term": {"sku": {"value": "a1", "boost": 2.0}}},
        ),
        (
            TermsQuery(field="sku", values=["a1", "a2"]),
            {"terms": {"sku": ["a1", "a2"]}},
        ),
        (
            MatchQuery(field="name", query="red shoe", operator="and"),
            {"match": {"name": {"query": "red shoe", "operator": "and"}}},
        ),
        (PrefixQuery(field="sku", prefix="a"), {"prefix": {"sku": "a"}}),
        (
            WildcardQuery(field="sku", pattern="a*1"),
            {"wildcard": {"sku": "a*1"}},
        ),
        (
            RangeQuery(field="price", gte=10, lt=20),
            {"range": {"price": {"gte": 10, "lt": 20}}},
        ),
        (ExistsQuery(field="sku"), {"exists": {"field": "sku"}}),
        (
            NestedQuery(
                path="variants",
                query=TermQuery(field="variants.color", value="red"),
                score_mode="max",
            ),
            {
                "nested": {
                    "path": "variants",
                    "query": {"term": {"variants.color": "red"}},
                    "score_mode": "max",
                }
            },
        ),
        (
            ConstantScoreQuery(filter=ExistsQuery(field="sku")),
            {"constant_score": {"filter": {"exists": {"field": "sku"}}}},
        ),
    ],
)
def test_query(version: EsVersion, query, expected: dict):
    assert render(query, version) == expected


def test_missing_query():
    query = MissingQuery(field="sku")
    assert render(query, EsVersion.V2) == {"missing": {"field": "sku"}}
    assert render(query, EsVersion.V6) == {
        "bool": {"must_not": [{"exists": {"field": "sku"}}]}
    }


def test_ids_query():
    query = IdsQuery(values=["1", "2"], types=["product"])
    assert render(query, EsVersion.V2) == {
        "ids": {"values": ["1", "2"], "type": ["product"]}
    }
    assert render(query, EsVersion.V6) == {"ids": {"values": ["1", "2"]}}
    assert render(IdsQuery(values=["1"]), EsVersion.V2) == {
        "ids": {"values": ["1"]}
    }


def test_bool_query():
    query = BoolQuery(
        must=[TermQuery(field="color", value="red")],
        must_not=[MissingQuery(field="sku")],
        should=[
            PrefixQuery(field="name", prefix="sh"),
            PrefixQuery(field="name", prefix="bo"),
        ],
        minimum_should_match=1,
    )
    assert render(query, EsVersion.V6) == {
        "bool": {
            "must": [{"term": {"color": "red"}}],
            "should": [
                {"prefix": {"name": "sh"}},
                {"prefix": {"name": "bo"}},
            ],
            "must_not": [
                {"bool": {"must_not": [{"exists": {"field": "sku"}}]}}
            ],
            "minimum_should_match": 1,
        }
    }
    assert render(BoolQuery(), EsVersion.V2) == {"bool": {}}


def test_query_root():
    root = QueryRoot(
        query=TermQuery(field="color", value="red"),
        from_=10,
        size=5,
        sort=[Sort(field="price", order=SortOrder.DESC), Sort(field="_doc")],
        source_includes=["name"],
        source_excludes=["internal.*"],
        timeout="10s",
        terminate_after=1000,
    )
    expected = {
        "query": {"term": {"color": "red"}},
        "from": 10,
        "size": 5,
        "sort": [{"price": {"order": "desc"}}, "_doc"],
        "timeout": "10s",
        "terminate_after": 1000,
    }
    assert render(root, EsVersion.V2) == {
        **expected,
        "_source": {"include": ["name"], "exclude": ["internal.*"]},
    }
    assert render(root, EsVersion.V6) == {
        **expected,
        "_source": {"includes": ["name"], "excludes": ["internal.*"]},
    }


@pytest.mark.parametrize("version", versions)
def test_query_root_defaults(version: EsVersion):
    assert render(QueryRoot(), version) == {"query": {"match_all": {}}}
    assert render(QueryRoot(source_excludes=[]), EsVersion.V6) == {
        "query": {"match_all": {}},
        "_source": {"excludes": []},
    }


def test_query_root_from_dict():
    root = QueryRoot.from_dict(
        {
            "query": {
                "kind": "bool",
                "filter": [{"kind": "term", "field": "color", "value": "red"}],
            },
            "size": 3,
        }
    )
    assert render(root, EsVersion.V6) == {
        "query": {"bool": {"filter": [{"term": {"color": "red"}}]}},
        "size": 3,
    }


@pytest.mark.parametrize("version", versions)
def test_scroll(version: EsVersion):
    assert render(Scroll(scroll_id="abc", window="1m"), version) == {
        "scroll": "1m",
        "scroll_id": "abc",
    }


def test_script_source():
    source = ScriptSource(source="ctx._source.n++", params={"a": 1})
    assert render(source, EsVersion.V2) == {"script": "ctx._source.n++"}
    assert render(source, EsVersion.V6) == {
        "script": {
            "lang": "painless",
            "source": "ctx._source.n++",
            "params": {"a": 1},
        }
    }
    assert render(ScriptSource(source="1"), EsVersion.V6) == {
        "script": {"lang": "painless", "source": "1"}
    }


@pytest.mark.parametrize("version", versions)
def test_create_index(version: EsVersion):
    op = CreateIndex(
        settings=IndexSetting(number_of_shards=3, refresh_interval="1s")
    )
    assert render(op, version) == {
        "settings": {"number_of_shards": 3, "refresh_interval": "1s"}
    }
    assert render(CreateIndex(), version) == {}


@pytest.mark.parametrize("version", versions)
def test_bulk_delete(version: EsVersion):
    op = BulkDelete(index="products", tpe="product", ids=["1", "2"])
    assert render(op, version) == [
        {"delete": {"_index": "products", "_type": "product", "_id": "1"}},
        {"delete": {"_index": "products", "_type": "product", "_id": "2"}},
    ]


def test_unsupported_node():
    with pytest.raises(BadRequestError):
        Renderer(EsVersion.V6).render(Index(name="products"))


def test_nodes_are_immutable():
    query = TermQuery(field="sku", value="a1")
    with pytest.raises(ValidationError):
        query.field = "name"
    assert query == TermQuery(field="sku", value="a1")
