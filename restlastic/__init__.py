from .client import ClientConfig, RestlasticSearchClient
from .dsl import EsVersion, Index, Type

__all__ = [
    "ClientConfig",
    "RestlasticSearchClient",
    "EsVersion",
    "Index",
    "Type",
]
