"""Movement schemas for item check-out, check-in, move and removal."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tote_inventory.models.movement import MovementAction


class MovementRequestSchema(BaseModel):
    """Common fields for every movement request."""

    actor_id: int | None = Field(
        default=None,
        description="User performing the action",
        json_schema_extra={"example": 1}
    )
    notes: str | None = Field(default=None, json_schema_extra={"example": "Borrowed for the weekend"})


class CheckInRequestSchema(MovementRequestSchema):
    container_id: int | None = Field(
        default=None,
        description="Container to return the item to; defaults to its previous container",
    )


class MoveRequestSchema(MovementRequestSchema):
    to_container_id: int = Field(..., description="Destination container", json_schema_extra={"example": 14})


class MovementResponseSchema(BaseModel):
    """One recorded movement."""

    id: int
    item_id: int
    action: MovementAction
    from_container_id: int | None
    to_container_id: int | None
    actor_id: int | None
    notes: str | None
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)
