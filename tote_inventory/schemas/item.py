"""Item schemas for request/response validation."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from tote_inventory.models.item import ItemCategory, ItemCondition, ItemStatus


class ItemCreateSchema(BaseModel):
    """Schema for creating a new item."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="What the item is",
        json_schema_extra={"example": "Camp stove"}
    )
    container_id: int | None = Field(
        default=None,
        description="Container the item is stored in",
        json_schema_extra={"example": 12}
    )
    description: str | None = None
    notes: str | None = None
    status: ItemStatus = Field(default=ItemStatus.IN_STORAGE)
    category: ItemCategory | None = Field(default=None, json_schema_extra={"example": "CAMPING_OUTDOORS"})
    condition: ItemCondition | None = None
    isbn: str | None = Field(default=None, max_length=32)
    quantity: int = Field(default=1, ge=1, json_schema_extra={"example": 1})
    tags: list[str] | None = None
    volume: float | None = Field(
        default=None,
        ge=0,
        description="Volume in cubic inches, used for container fill tracking",
        json_schema_extra={"example": 300.0}
    )
    expiration_date: date | None = None
    is_container: bool = Field(
        default=False,
        description="The item holds other things and may sit in a rack slot itself",
    )


class ItemUpdateSchema(BaseModel):
    """Schema for updating item details; location and status change through movements."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    notes: str | None = None
    category: ItemCategory | None = None
    condition: ItemCondition | None = None
    isbn: str | None = Field(default=None, max_length=32)
    quantity: int | None = Field(default=None, ge=1)
    tags: list[str] | None = None
    volume: float | None = Field(default=None, ge=0)
    expiration_date: date | None = None
    is_container: bool | None = None


class ItemListQuerySchema(BaseModel):
    """Query parameters for listing items."""

    status: ItemStatus | None = None
    category: ItemCategory | None = None
    container_id: int | None = None
    limit: int = Field(default=100, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


class ItemPhotoCreateSchema(BaseModel):
    url: str = Field(
        ...,
        max_length=2000,
        description="http(s) address of the photo",
        json_schema_extra={"example": "https://example.com/photos/stove.jpg"}
    )
    caption: str | None = None


class ItemPhotoResponseSchema(BaseModel):
    id: int
    item_id: int
    url: str
    caption: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ItemSummarySchema(BaseModel):
    """Lightweight item reference for grids and lists."""

    id: int = Field(json_schema_extra={"example": 31})
    name: str = Field(json_schema_extra={"example": "Cooler"})
    description: str | None
    status: ItemStatus
    is_container: bool

    model_config = ConfigDict(from_attributes=True)


class ItemResponseSchema(BaseModel):
    """Schema for full item details."""

    id: int = Field(description="Item identifier", json_schema_extra={"example": 31})
    name: str
    description: str | None
    notes: str | None
    status: ItemStatus
    category: ItemCategory | None
    condition: ItemCondition | None
    isbn: str | None
    quantity: int
    tags: list[str] | None
    volume: float | None
    expiration_date: date | None
    container_id: int | None
    is_container: bool
    current_slot_id: int | None
    photos: list[ItemPhotoResponseSchema] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
