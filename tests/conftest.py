"""
Pytest configuration and shared fixtures.
"""

import hashlib

import numpy as np
import pytest

from smoogle.core.domain import RawMatch
from smoogle.core.ports.embedding_port import EmbeddingProviderPort
from smoogle.core.ports.vector_store_port import SimilarityIndexPort

TEST_DIMENSION = 16


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (in-process app)")


class HashingProvider(EmbeddingProviderPort):
    """Deterministic stand-in for the sentence-transformers provider.

    Each whitespace-separated token maps to a pseudo-random vector seeded
    by its hash, so the output is a ``tokens x dim`` matrix like the real
    model's token embeddings.
    """

    def __init__(self, dimension: int = TEST_DIMENSION) -> None:
        self.dimension = dimension
        self.load_calls = 0
        self.invocations: list[str] = []

    def load(self):
        self.load_calls += 1

        def embed(text: str) -> np.ndarray:
            self.invocations.append(text)
            rows = []
            for token in text.split():
                seed = int(hashlib.md5(token.encode()).hexdigest()[:8], 16)
                rows.append(np.random.default_rng(seed).standard_normal(self.dimension))
            return np.vstack(rows)

        return embed


class FakeIndex(SimilarityIndexPort):
    """In-memory similarity index returning canned matches."""

    def __init__(self, matches=(), error: Exception | None = None) -> None:
        self.matches = tuple(matches)
        self.error = error
        self.calls: list[tuple[list[float], int]] = []

    async def query(self, vector, top_k=5):
        self.calls.append((list(vector), top_k))
        if self.error is not None:
            raise self.error
        return self.matches[:top_k]

    async def collection_stats(self):
        return {"name": "contracts", "count": len(self.matches), "status": "green"}


def make_match(score: float, title: str, **extra: str) -> RawMatch:
    suffix = title.lower().replace(" ", "-")
    metadata = {
        "tag": title,
        "url": f"https://etherscan.io/address/{suffix}",
        "contractaddress": f"0x{suffix}",
        "creatoraddress": "0xcreator",
        **extra,
    }
    return RawMatch(score=score, metadata=metadata)


@pytest.fixture
def provider():
    """Deterministic embedding provider."""
    return HashingProvider()


@pytest.fixture
def catalog_matches():
    """Ranked matches as the index would return them."""
    return [
        make_match(0.91, "ERC20 Token"),
        make_match(0.84, "Capped Token"),
        make_match(0.77, "Token Vesting"),
        make_match(0.65, "Multisig Wallet"),
        make_match(0.52, "NFT Marketplace"),
        make_match(0.41, "Staking Pool"),
        make_match(0.30, "DAO Governor"),
    ]


@pytest.fixture
def fake_index(catalog_matches):
    """Index returning the catalog matches."""
    return FakeIndex(catalog_matches)


@pytest.fixture
def dimension():
    """Embedding dimension produced by the test provider."""
    return TEST_DIMENSION


@pytest.fixture(name="make_index")
def make_index_fixture():
    """Factory for in-memory indexes: ``make_index(matches, error=None)``."""
    return FakeIndex


@pytest.fixture(name="make_match")
def make_match_fixture():
    """Factory for catalog matches: ``make_match(score, title, **extra)``."""
    return make_match
