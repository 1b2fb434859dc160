"""Shared helpers for query text and request parameters."""

import unicodedata

from .exceptions import InvalidQueryError, InvalidTopKError

MAX_TOP_K = 100


def normalize_text(text: str | None) -> str:
    """Strip BOM markers, apply NFKC normalization and trim whitespace.

    Args:
        text: Raw user input, possibly None.

    Returns:
        Cleaned text (empty string for None or empty input).
    """
    if not text:
        return ""
    cleaned = text.replace("\ufeff", "").replace("\ufffd", "")
    return unicodedata.normalize("NFKC", cleaned).strip()


def ensure_query(text: str | None) -> str:
    """Return the normalized query or raise if nothing is left to search for.

    Raises:
        InvalidQueryError: If the query is empty or whitespace only.
    """
    cleaned = normalize_text(text)
    if not cleaned:
        raise InvalidQueryError("Query cannot be empty or whitespace only")
    return cleaned


def validate_top_k(top_k: int) -> int:
    """Check that a top-K value is a positive integer within bounds.

    Raises:
        InvalidTopKError: If the value is not an int in 1..MAX_TOP_K.
    """
    if isinstance(top_k, bool) or not isinstance(top_k, int):
        raise InvalidTopKError(
            f"top_k must be an integer, got {type(top_k).__name__}",
            context={"top_k": repr(top_k)},
        )
    if not 1 <= top_k <= MAX_TOP_K:
        raise InvalidTopKError(
            f"top_k must be between 1 and {MAX_TOP_K}, got {top_k}",
            context={"top_k": top_k},
        )
    return top_k
