"""Container schemas for request/response validation."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tote_inventory.models.container import ContainerStatus
from tote_inventory.models.placement import Nested, Racked, Unplaced
from tote_inventory.schemas.container_type import ContainerTypeSummarySchema
from tote_inventory.utils.volume import CapacityWarningLevel

PlacementKind = Literal["racked", "nested", "unplaced"]


class ContainerCreateSchema(BaseModel):
    """Schema for creating a new container."""

    label: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Human readable name, e.g. as written on the tote",
        json_schema_extra={"example": "Bin #7"}
    )
    code: str | None = Field(
        default=None,
        min_length=1,
        max_length=64,
        description="QR code value; derived from the label when omitted and never changed afterwards",
        json_schema_extra={"example": "BIN-07"}
    )
    description: str | None = Field(default=None, json_schema_extra={"example": "Winter clothes"})
    status: ContainerStatus = Field(default=ContainerStatus.ACTIVE)
    tags: list[str] | None = Field(default=None, json_schema_extra={"example": ["seasonal"]})
    container_type_id: int | None = Field(default=None, json_schema_extra={"example": 8})


class ContainerUpdateSchema(BaseModel):
    """Schema for updating a container; the code cannot be changed."""

    model_config = ConfigDict(extra="forbid")

    label: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    status: ContainerStatus | None = None
    tags: list[str] | None = None
    container_type_id: int | None = None


class ContainerListQuerySchema(BaseModel):
    """Query parameters for listing containers."""

    status: ContainerStatus | None = None
    container_type_id: int | None = None
    placement: PlacementKind | None = Field(
        default=None,
        description="Only containers that are racked, nested or unplaced",
    )


class SlotAssignmentSchema(BaseModel):
    """Request to put something into a rack slot."""

    slot_id: int = Field(..., description="Target slot", json_schema_extra={"example": 42})


class ParentAssignmentSchema(BaseModel):
    """Request to nest a container; null un-nests it."""

    parent_id: int | None = Field(..., description="Container to nest inside, or null", json_schema_extra={"example": 5})


class PlacementSchema(BaseModel):
    """Where a container currently is."""

    kind: PlacementKind
    slot_id: int | None = None
    parent_container_id: int | None = None


def placement_to_dict(placement: Any) -> Any:
    """Convert a placement variant to its wire form; other values pass through."""
    if isinstance(placement, Racked):
        return {"kind": "racked", "slot_id": placement.slot_id}
    if isinstance(placement, Nested):
        return {"kind": "nested", "parent_container_id": placement.parent_container_id}
    if isinstance(placement, Unplaced):
        return {"kind": "unplaced"}
    return placement


class ContainerSummarySchema(BaseModel):
    """Lightweight container reference for lists and grids."""

    id: int = Field(json_schema_extra={"example": 12})
    code: str = Field(json_schema_extra={"example": "BIN-07"})
    label: str = Field(json_schema_extra={"example": "Bin #7"})
    status: ContainerStatus
    container_type: ContainerTypeSummarySchema | None = None

    model_config = ConfigDict(from_attributes=True)


class ContainerResponseSchema(BaseModel):
    """Schema for full container details."""

    id: int = Field(description="Container identifier", json_schema_extra={"example": 12})
    code: str = Field(description="Unique QR code value", json_schema_extra={"example": "BIN-07"})
    label: str = Field(json_schema_extra={"example": "Bin #7"})
    description: str | None
    status: ContainerStatus
    tags: list[str] | None
    current_slot_id: int | None
    parent_container_id: int | None
    container_type_id: int | None
    container_type: ContainerTypeSummarySchema | None = None
    legacy_type: str | None = Field(description="Free-text type awaiting migration")
    capacity: float | None = Field(description="Capacity in cubic inches, from the container type")
    placement: PlacementSchema
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("placement", mode="before")
    @classmethod
    def convert_placement(cls, value: Any) -> Any:
        return placement_to_dict(value)


class ContainerCapacitySchema(BaseModel):
    """Fill summary for a container."""

    total_item_volume: float = Field(json_schema_extra={"example": 1500.0})
    container_capacity: float = Field(json_schema_extra={"example": 5396.25})
    fill_percentage: float = Field(json_schema_extra={"example": 27.8})
    has_capacity_data: bool
    items_with_volume: int
    total_items: int
    warning_level: CapacityWarningLevel | None = Field(json_schema_extra={"example": "FILLING_UP"})
    warning: str | None
    display_text: str = Field(json_schema_extra={"example": "0.87 cu ft / 3.12 cu ft (27.8%)"})

    model_config = ConfigDict(from_attributes=True)
