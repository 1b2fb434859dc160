"""Domain models for Smoogle.

- contract: RawMatch, SearchResult and ResultSet for similarity search
- query_state: QueryPhase, ErrorKind and QueryState for the search controller

    from smoogle.core.domain import RawMatch, SearchResult, QueryState
"""

from .contract import (
    CONTRACT_ADDRESS_KEY,
    CREATOR_ADDRESS_KEY,
    TITLE_KEY,
    URL_KEY,
    RawMatch,
    ResultSet,
    SearchResult,
)
from .query_state import ErrorKind, QueryPhase, QueryState

__all__ = [
    # Contract models
    "RawMatch",
    "SearchResult",
    "ResultSet",
    "TITLE_KEY",
    "URL_KEY",
    "CONTRACT_ADDRESS_KEY",
    "CREATOR_ADDRESS_KEY",
    # Query lifecycle
    "QueryPhase",
    "ErrorKind",
    "QueryState",
]
