"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class PublicUrlResponse(BaseModel):
    """Response DTO for ``json=true`` image requests."""

    public_url: str = Field(
        ...,
        serialization_alias="publicUrl",
        description="Public URL of the resolved image",
        min_length=1,
    )


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")
    cache_backend: str = Field(..., description="Configured cache backend")


class ErrorResponse(BaseModel):
    """Response DTO for server errors raised while resolving images."""

    detail: str = Field(..., description="Human-readable error message")
