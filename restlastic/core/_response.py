from typing import Any, Generic, TypeVar

from .data_model import DataModel

T = TypeVar("T")


class Response(DataModel, Generic[T]):
    result: T
    """Typed result of the operation."""

    native: dict[str, Any] | None = None
    """Raw body returned by Elasticsearch."""
