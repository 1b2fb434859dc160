"""Unit tests for mapping index matches to search results."""

import pytest

from smoogle.core.domain import RawMatch, SearchResult
from smoogle.core.services import ResultResolver

pytestmark = pytest.mark.unit


class TestSearchResult:
    """Tests for the SearchResult projection."""

    def test_maps_fixed_metadata_keys(self):
        """The catalog keys map onto the display fields."""
        match = RawMatch(
            score=0.93,
            metadata={
                "tag": "ERC20 Token",
                "url": "https://x",
                "contractaddress": "0xabc",
                "creatoraddress": "0xdef",
            },
        )

        result = SearchResult.from_match(match)

        assert result.to_display() == {
            "Title": "ERC20 Token",
            "URL": "https://x",
            "Contract": "0xabc",
            "Creator": "0xdef",
        }
        assert result.score == 0.93

    def test_missing_keys_become_empty(self):
        """A match without expected keys still resolves, with empty fields."""
        result = SearchResult.from_match(RawMatch(score=0.4, metadata={"tag": "Orphan"}))

        assert result.title == "Orphan"
        assert result.url == ""
        assert result.contract_address == ""
        assert result.creator_address == ""

    def test_unknown_keys_are_ignored(self):
        """Extra metadata written at index time does not leak into results."""
        match = RawMatch(score=0.5, metadata={"tag": "Token", "chain": "mainnet", "abi": "[]"})

        assert SearchResult.from_match(match).to_dict() == {
            "title": "Token",
            "url": "",
            "contract_address": "",
            "creator_address": "",
            "score": 0.5,
        }


class TestResultResolver:
    """Tests for ResultResolver ordering."""

    def test_preserves_index_order(self, make_match):
        """Results are never re-sorted, even if scores arrive out of order."""
        matches = [make_match(0.7, "B"), make_match(0.9, "A"), make_match(0.8, "C")]

        results = ResultResolver().resolve(matches)

        assert [r.title for r in results] == ["B", "A", "C"]

    def test_empty_matches(self):
        """No matches resolve to an empty result set."""
        assert ResultResolver().resolve([]) == ()

    def test_returns_immutable_sequence(self, catalog_matches):
        """The result set is a tuple of the same length as the input."""
        results = ResultResolver().resolve(catalog_matches)

        assert isinstance(results, tuple)
        assert len(results) == len(catalog_matches)
