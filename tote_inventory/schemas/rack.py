"""Rack and slot schemas for request/response validation."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tote_inventory.schemas.container import ContainerSummarySchema
from tote_inventory.schemas.item import ItemSummarySchema
from tote_inventory.schemas.location import LocationResponseSchema


class RackCreateSchema(BaseModel):
    """Schema for creating a rack with its slot grid."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Unique rack name",
        json_schema_extra={"example": "Garage Shelf A"}
    )
    rows: int = Field(..., ge=1, le=100, description="Number of rows (lettered A, B, ...)", json_schema_extra={"example": 4})
    cols: int = Field(..., ge=1, le=100, description="Number of columns (numbered from 1)", json_schema_extra={"example": 3})
    location_id: int = Field(..., description="Location the rack stands at", json_schema_extra={"example": 1})


class RackUpdateSchema(BaseModel):
    """Rename or relocate a rack. Rows and columns are fixed once created."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    location_id: int | None = None


class RackListQuerySchema(BaseModel):
    location_id: int | None = None


class RackResponseSchema(BaseModel):
    """Schema for rack details."""

    id: int = Field(description="Rack identifier", json_schema_extra={"example": 2})
    name: str = Field(json_schema_extra={"example": "Garage Shelf A"})
    rows: int
    cols: int
    slot_count: int
    location_id: int
    location: LocationResponseSchema | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SlotResponseSchema(BaseModel):
    """One grid cell of a rack."""

    id: int = Field(json_schema_extra={"example": 42})
    rack_id: int
    row: int = Field(description="0-based row", json_schema_extra={"example": 0})
    col: int = Field(description="0-based column", json_schema_extra={"example": 0})
    label: str = Field(description="Spreadsheet-style label", json_schema_extra={"example": "A1"})
    container_id: int | None
    item_id: int | None
    is_occupied: bool
    version: int

    model_config = ConfigDict(from_attributes=True)


class GridSlotSchema(SlotResponseSchema):
    """Slot with its occupant expanded."""

    container: ContainerSummarySchema | None = None
    item: ItemSummarySchema | None = None


class RackGridSchema(BaseModel):
    """Rack map: slots plus everything that could be placed onto it."""

    rack: RackResponseSchema
    slots: list[GridSlotSchema]
    unplaced_containers: list[ContainerSummarySchema]
    unplaced_container_items: list[ItemSummarySchema]

    model_config = ConfigDict(from_attributes=True)
