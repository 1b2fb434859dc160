"""Query resolution services: embed, search, resolve."""

from .query_controller import QueryController, StateListener
from .query_embedder import QueryEmbedder, mean_pool_and_normalize
from .result_resolver import ResultResolver

__all__ = [
    "QueryController",
    "StateListener",
    "QueryEmbedder",
    "ResultResolver",
    "mean_pool_and_normalize",
]
