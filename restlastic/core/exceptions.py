__all__ = [
    "BaseError",
    "BadRequestError",
    "ConflictError",
    "ElasticErrorResponse",
    "IndexAlreadyExistsError",
    "TransportFailure",
]

import json
from typing import Any


class BaseError(Exception):
    status_code: int


class BadRequestError(BaseError):
    status_code = 400


class ConflictError(BaseError):
    status_code = 409


class TransportFailure(BaseError):
    """Network error or timeout raised below the REST layer."""

    status_code = 503


class ElasticErrorResponse(BaseError):
    """Non-2xx response returned by Elasticsearch."""

    message: str
    status: int

    def __init__(self, message: Any, status: int):
        if not isinstance(message, str):
            message = json.dumps(message)
        self.message = message
        self.status = status
        self.status_code = status
        super().__init__(f"{status}: {message}")

    def contains(self, signature: str) -> bool:
        return signature in self.message


class IndexAlreadyExistsError(ConflictError):
    """Index creation hit an index that already exists."""

    index: str
    message: str

    def __init__(self, index: str, message: str):
        self.index = index
        self.message = message
        super().__init__(f"Index {index} already exists: {message}")
