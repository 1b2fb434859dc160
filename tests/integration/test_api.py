"""Integration tests for FastAPI endpoints."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from smoogle.adapters.inbound.api.deps import get_controller
from smoogle.adapters.inbound.api.main import app
from smoogle.core.domain.exceptions import IndexQueryError
from smoogle.core.services import QueryController, QueryEmbedder

pytestmark = pytest.mark.integration


@pytest.fixture
def index(fake_index):
    return fake_index


@pytest.fixture
def client(provider, index):
    """Create test client with an in-memory pipeline."""
    app.dependency_overrides[get_controller] = lambda: QueryController(
        QueryEmbedder(provider), index, top_k=5
    )
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


class TestSearchEndpoint:
    """Tests for POST /api/v1/search."""

    def test_search_success(self, client):
        """A valid query returns ranked contracts."""
        response = client.post("/api/v1/search", json={"query": "  ERC20 token  "})

        assert response.status_code == 200
        data = response.json()
        assert data["query"] == "ERC20 token"
        assert len(data["results"]) == 5
        assert data["results"][0] == {
            "title": "ERC20 Token",
            "url": "https://etherscan.io/address/erc20-token",
            "contract_address": "0xerc20-token",
            "creator_address": "0xcreator",
            "score": 0.91,
        }

    def test_search_respects_top_k(self, client, index):
        """top_k limits the number of results."""
        response = client.post("/api/v1/search", json={"query": "token", "top_k": 2})

        assert response.status_code == 200
        assert len(response.json()["results"]) == 2
        assert index.calls[-1][1] == 2

    def test_search_scores_descending(self, client):
        response = client.post("/api/v1/search", json={"query": "token", "top_k": 7})

        scores = [r["score"] for r in response.json()["results"]]
        assert scores == sorted(scores, reverse=True)

    def test_whitespace_query_is_400(self, client, index):
        """A whitespace-only query is rejected with its error code."""
        response = client.post("/api/v1/search", json={"query": "   "})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "SMG_VAL_002"
        assert index.calls == []

    def test_empty_query_is_400(self, client, index):
        """An empty string gets the same error code as a blank one."""
        response = client.post("/api/v1/search", json={"query": ""})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "SMG_VAL_002"
        assert index.calls == []

    def test_invalid_top_k_is_422(self, client):
        response = client.post("/api/v1/search", json={"query": "token", "top_k": 0})

        assert response.status_code == 422

    @pytest.mark.parametrize(
        "index", [MagicMock(query=AsyncMock(side_effect=IndexQueryError("timed out")))]
    )
    def test_index_failure_is_503(self, client):
        """Index failures surface as 503 with the error code, not an empty list."""
        response = client.post("/api/v1/search", json={"query": "token"})

        assert response.status_code == 503
        data = response.json()
        assert data["error"]["type"] == "IndexQueryError"
        assert data["error"]["code"] == "SMG_VEC_002"

    @pytest.mark.parametrize(
        "index", [MagicMock(query=AsyncMock(side_effect=ValueError("vector must be unit-norm")))]
    )
    def test_non_unit_vector_is_500(self, client):
        """A malformed query vector is a server fault, not a client error."""
        response = client.post("/api/v1/search", json={"query": "token"})

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "PYTHON_ERR"


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_readiness_check(self, client, index):
        """Readiness reports the contract count of the collection."""
        with patch(
            "smoogle.adapters.inbound.api.routers.health.get_vector_store", return_value=index
        ):
            response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["vector_store"] == "connected (7 contracts in contracts)"

    def test_readiness_reports_errors(self, client):
        failing = MagicMock(collection_stats=AsyncMock(side_effect=IndexQueryError("down")))
        with patch(
            "smoogle.adapters.inbound.api.routers.health.get_vector_store", return_value=failing
        ):
            response = client.get("/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"
        assert response.json()["vector_store"] == "error: down"
