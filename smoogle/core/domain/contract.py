"""Match and result models for smart-contract search."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

# Metadata keys written at index-build time
TITLE_KEY = "tag"
URL_KEY = "url"
CONTRACT_ADDRESS_KEY = "contractaddress"
CREATOR_ADDRESS_KEY = "creatoraddress"


@dataclass(frozen=True)
class RawMatch:
    """A single hit returned by the similarity index.

    Attributes:
        score: Similarity score (higher is more similar).
        metadata: Metadata attached to the stored vector. Wrapped in a
            read-only mapping on construction.
    """

    score: float
    metadata: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))


@dataclass(frozen=True)
class SearchResult:
    """Display-ready projection of a RawMatch.

    Attributes:
        title: Contract title (the ``tag`` metadata key).
        url: Link to the contract page.
        contract_address: On-chain address of the contract.
        creator_address: Address of the account that deployed it.
        score: Similarity score of the originating match.
    """

    title: str = ""
    url: str = ""
    contract_address: str = ""
    creator_address: str = ""
    score: float = 0.0

    @classmethod
    def from_match(cls, match: RawMatch) -> "SearchResult":
        """Project a RawMatch onto the fixed metadata keys.

        Missing keys yield empty strings; unknown keys are ignored.
        """
        metadata = match.metadata
        return cls(
            title=metadata.get(TITLE_KEY, ""),
            url=metadata.get(URL_KEY, ""),
            contract_address=metadata.get(CONTRACT_ADDRESS_KEY, ""),
            creator_address=metadata.get(CREATOR_ADDRESS_KEY, ""),
            score=match.score,
        )

    def to_display(self) -> dict[str, str]:
        """Return the presentation form used by the result list."""
        return {
            "Title": self.title,
            "URL": self.url,
            "Contract": self.contract_address,
            "Creator": self.creator_address,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "contract_address": self.contract_address,
            "creator_address": self.creator_address,
            "score": self.score,
        }


# Ordered as returned by the index; never re-sorted locally
ResultSet = tuple[SearchResult, ...]
