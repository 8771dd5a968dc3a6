"""Health check response schema."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness and readiness probe payload."""

    status: str = Field(description="Probe status", json_schema_extra={"example": "ready"})
    ready: bool = Field(description="Whether the app can serve requests")
