"""Location schemas for request/response validation."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LocationCreateSchema(BaseModel):
    """Schema for creating a new location."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Unique name of the site",
        json_schema_extra={"example": "Garage"}
    )
    notes: str | None = Field(
        default=None,
        description="Free-form notes about the site",
        json_schema_extra={"example": "Left wall, behind the bikes"}
    )


class LocationUpdateSchema(BaseModel):
    """Schema for updating a location; omitted fields stay unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    notes: str | None = None


class LocationResponseSchema(BaseModel):
    """Schema for location details."""

    id: int = Field(description="Location identifier", json_schema_extra={"example": 3})
    name: str = Field(description="Unique name of the site", json_schema_extra={"example": "Garage"})
    notes: str | None = Field(description="Free-form notes about the site")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LocationWithRackCountSchema(LocationResponseSchema):
    """Location with the number of racks it holds."""

    rack_count: int = Field(description="Racks at this location", json_schema_extra={"example": 2})
