from gym_dashboard.query.cache import QueryCache, QueryKey, as_key
from gym_dashboard.query.client import (
    Mutation,
    MutationOptions,
    MutationResult,
    QueryClient,
    QueryOptions,
    QueryResult,
)
from gym_dashboard.query.debounce import Debouncer

__all__ = [
    "Debouncer",
    "Mutation",
    "MutationOptions",
    "MutationResult",
    "QueryCache",
    "QueryClient",
    "QueryKey",
    "QueryOptions",
    "QueryResult",
    "as_key",
]
