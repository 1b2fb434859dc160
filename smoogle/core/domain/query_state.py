"""Query lifecycle models for the search controller."""

from dataclasses import dataclass
from enum import Enum

from .contract import ResultSet
from .exceptions import (
    EmbeddingError,
    InvalidQueryError,
    ModelLoadError,
    VectorStoreError,
)


class QueryPhase(Enum):
    """Phase of the most recent query submission.

    Attributes:
        IDLE: Nothing submitted yet, or the last submission was rejected.
        EMBEDDING: Turning the query text into a vector.
        SEARCHING: Waiting on the similarity index.
        DISPLAYING: Results of the latest query are available.
        FAILED: The latest query failed; see ``QueryState.error_kind``.
    """

    IDLE = "idle"
    EMBEDDING = "embedding"
    SEARCHING = "searching"
    DISPLAYING = "displaying"
    FAILED = "failed"


class ErrorKind(Enum):
    """Category of a failed query, surfaced to the presentation layer."""

    INVALID_QUERY = "invalid_query"
    MODEL_LOAD = "model_load"
    EMBEDDING = "embedding"
    INDEX_QUERY = "index_query"
    UNEXPECTED = "unexpected"

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorKind":
        # ModelLoadError subclasses EmbeddingError, so it is checked first
        if isinstance(exc, InvalidQueryError):
            return cls.INVALID_QUERY
        if isinstance(exc, ModelLoadError):
            return cls.MODEL_LOAD
        if isinstance(exc, EmbeddingError):
            return cls.EMBEDDING
        if isinstance(exc, VectorStoreError):
            return cls.INDEX_QUERY
        return cls.UNEXPECTED


BUSY_PHASES = frozenset({QueryPhase.EMBEDDING, QueryPhase.SEARCHING})


@dataclass(frozen=True)
class QueryState:
    """Visible state of the search controller.

    Attributes:
        phase: Current lifecycle phase.
        sequence: Sequence number of the submission this state belongs to.
        query: Query text of that submission.
        results: Result set, only populated in the DISPLAYING phase.
        error: Failure cause, only populated in the FAILED phase.
    """

    phase: QueryPhase = QueryPhase.IDLE
    sequence: int = 0
    query: str = ""
    results: ResultSet = ()
    error: BaseException | None = None

    @property
    def busy(self) -> bool:
        return self.phase in BUSY_PHASES

    @property
    def error_kind(self) -> ErrorKind | None:
        if self.error is None:
            return None
        return ErrorKind.from_exception(self.error)
