from restlastic.core.exceptions import (
    BadRequestError,
    BaseError,
    ConflictError,
    ElasticErrorResponse,
    IndexAlreadyExistsError,
    TransportFailure,
)

from ._converter import OperationConverter, ResultConverter
from ._models import (
    AddScriptResponse,
    ClientConfig,
    DeleteResponse,
    RawJsonResponse,
    RawSearchResponse,
    ScriptFound,
    ScriptLookup,
    ScriptNotFound,
    ScrollId,
    ScrollPage,
    SearchHit,
    SearchResponse,
)
from ._transport import ElasticTransport, Transport
from .client import RestlasticSearchClient

__all__ = [
    "RestlasticSearchClient",
    "ClientConfig",
    # Transport
    "ElasticTransport",
    "Transport",
    "OperationConverter",
    "ResultConverter",
    # Results
    "AddScriptResponse",
    "DeleteResponse",
    "RawJsonResponse",
    "RawSearchResponse",
    "ScriptFound",
    "ScriptLookup",
    "ScriptNotFound",
    "ScrollId",
    "ScrollPage",
    "SearchHit",
    "SearchResponse",
    # Errors
    "BadRequestError",
    "BaseError",
    "ConflictError",
    "ElasticErrorResponse",
    "IndexAlreadyExistsError",
    "TransportFailure",
]
