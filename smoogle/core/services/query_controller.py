"""Query controller sequencing embed -> search -> resolve per submission.

Every submission is tagged with a monotonically increasing sequence number.
Results (and errors) of a submission are applied to the visible state only
while that submission is still the latest one; anything else is discarded
as stale. In-flight work is never cancelled, only fenced.
"""

import logging
from collections.abc import Callable

from ..domain import QueryPhase, QueryState
from ..domain.exceptions import InvalidQueryError, SmoogleError
from ..domain.utils import normalize_text, validate_top_k
from ..ports.vector_store_port import SimilarityIndexPort
from .query_embedder import QueryEmbedder
from .result_resolver import ResultResolver

logger = logging.getLogger(__name__)

StateListener = Callable[[QueryState], None]


class QueryController:
    """Owns the query state machine, busy flag and staleness fence."""

    def __init__(
        self,
        embedder: QueryEmbedder,
        index: SimilarityIndexPort,
        resolver: ResultResolver | None = None,
        top_k: int = 5,
    ) -> None:
        """Initialize the controller.

        Args:
            embedder: Converts query text to a unit-norm vector.
            index: Read-only similarity index.
            resolver: Maps raw matches to search results.
            top_k: Default number of results per query.
        """
        self.embedder = embedder
        self.index = index
        self.resolver = resolver or ResultResolver()
        self.top_k = validate_top_k(top_k)
        self._sequence = 0
        self._state = QueryState()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state.busy

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a callback invoked on every visible state change.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def is_current(self, sequence: int) -> bool:
        return sequence == self._sequence

    async def submit(self, query: str, top_k: int | None = None) -> QueryState | None:
        """Run the full pipeline for one query.

        Args:
            query: Free-text search query.
            top_k: Result count for this query; defaults to the controller's.

        Returns:
            The final state applied for this submission, or None if a newer
            submission superseded it before it finished.

        Raises:
            InvalidQueryError: If the query is empty; state returns to IDLE.
            InvalidTopKError: If ``top_k`` is out of range; state is untouched.
        """
        limit = self.top_k if top_k is None else validate_top_k(top_k)

        self._sequence += 1
        sequence = self._sequence
        text = normalize_text(query)

        if not text:
            self._set_state(QueryState(QueryPhase.IDLE, sequence, query or ""))
            raise InvalidQueryError(
                "Query cannot be empty or whitespace only",
                context={"sequence": sequence},
            )

        logger.info("Query %d submitted: %r (top_k=%d)", sequence, text, limit)
        self._set_state(QueryState(QueryPhase.EMBEDDING, sequence, text))

        try:
            vector = await self.embedder.embed(text)
            if not self.is_current(sequence):
                return self._discard(sequence, "embedding")

            self._set_state(QueryState(QueryPhase.SEARCHING, sequence, text))
            matches = await self.index.query(vector.tolist(), top_k=limit)
            results = self.resolver.resolve(matches)
        except SmoogleError as e:
            if not self.is_current(sequence):
                return self._discard(sequence, f"error {e.error_code}")
            logger.warning("Query %d failed [%s]: %s", sequence, e.error_code, e.message)
            return self._set_state(QueryState(QueryPhase.FAILED, sequence, text, error=e))
        except Exception as e:
            if self.is_current(sequence):
                self._set_state(QueryState(QueryPhase.FAILED, sequence, text, error=e))
            raise

        if not self.is_current(sequence):
            return self._discard(sequence, "search")

        logger.info("Query %d resolved with %d results", sequence, len(results))
        return self._set_state(QueryState(QueryPhase.DISPLAYING, sequence, text, results=results))

    def _discard(self, sequence: int, step: str) -> None:
        logger.debug(
            "Discarding stale %s outcome of query %d (latest is %d)",
            step,
            sequence,
            self._sequence,
        )
        return None

    def _set_state(self, state: QueryState) -> QueryState:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
        return state
