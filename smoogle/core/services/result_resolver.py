"""Maps raw index matches to display-ready search results."""

import logging
from collections.abc import Sequence

from ..domain import RawMatch, ResultSet, SearchResult

logger = logging.getLogger(__name__)


class ResultResolver:
    """Projects RawMatch metadata onto the SearchResult schema.

    The index's ranking is authoritative: results keep the order in which
    matches were returned and are never re-sorted.
    """

    def resolve(self, matches: Sequence[RawMatch]) -> ResultSet:
        results = tuple(SearchResult.from_match(match) for match in matches)

        incomplete = sum(1 for r in results if not (r.title and r.url))
        if incomplete:
            logger.debug("%d of %d matches are missing title or url", incomplete, len(results))
        return results
