from ._async_helper import run_sync
from ._response import Response
from .data_model import DataModel, DslNode

__all__ = [
    "DataModel",
    "DslNode",
    "Response",
    "run_sync",
]
