"""
Common response schemas for consistent API structure.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format."""
    model_config = ConfigDict(from_attributes=True)

    error: str = Field(..., description="Error message", json_schema_extra={"example": "Slot A1 is already occupied by container BIN-01"})
    details: Any | None = Field(None, description="Additional error details", json_schema_extra={"example": {"message": "The slot already holds something else", "code": "SLOT_OCCUPIED"}})


class MessageResponseSchema(BaseModel):
    """Simple message response format."""
    model_config = ConfigDict(from_attributes=True)

    message: str = Field(..., description="Response message", json_schema_extra={"example": "Container released"})


class ConfirmQuerySchema(BaseModel):
    """Query parameters for destructive endpoints."""

    confirm: bool = Field(
        default=False,
        description="Must be true for the action to run",
        json_schema_extra={"example": True},
    )
