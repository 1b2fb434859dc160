"""Pydantic models for API requests and responses."""

from pydantic import BaseModel, Field

from ....core.domain import SearchResult


class SearchRequest(BaseModel):
    """Request model for a contract search."""

    query: str = Field(
        ...,
        max_length=1000,
        description="Free-text description of the contract to find",
        json_schema_extra={"example": "ERC20 token with a capped supply"},
    )
    top_k: int | None = Field(
        None,
        ge=1,
        le=100,
        description="Number of results to return (server default when omitted)",
    )


class ContractResult(BaseModel):
    """A single matching contract."""

    title: str = Field(..., description="Contract title from the catalog")
    url: str = Field(..., description="Link to the contract page")
    contract_address: str = Field(..., description="On-chain contract address")
    creator_address: str = Field(..., description="Address of the deployer")
    score: float = Field(..., description="Similarity score (higher is more similar)")

    @classmethod
    def from_domain(cls, result: SearchResult) -> "ContractResult":
        return cls(**result.to_dict())


class SearchResponse(BaseModel):
    """Response model for a contract search."""

    query: str = Field(..., description="The normalized query that was searched")
    results: list[ContractResult] = Field(
        default_factory=list,
        description="Matches ordered by descending similarity",
    )


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    vector_store: str = Field(..., description="Vector store backend status")


class ErrorDetail(BaseModel):
    """Structured error detail information."""

    type: str = Field(..., description="Exception type name")
    code: str = Field(..., description="Error code (e.g., SMG_VEC_002)")
    message: str = Field(..., description="Human-readable error message")


class ErrorResponse(BaseModel):
    """Error body returned by the exception handlers."""

    error: ErrorDetail
