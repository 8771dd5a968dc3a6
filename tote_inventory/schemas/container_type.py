"""Container type schemas for request/response validation."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from tote_inventory.utils.volume import format_volume

IconKey = Literal["tote", "box", "bin", "suitcase", "carry-on"]

CODE_PREFIX_PATTERN = r"^[A-Za-z0-9_-]+$"


class ContainerTypeDimensionsSchema(BaseModel):
    """Dimensions in inches. Provide either length/width/height or the tapered set plus height."""

    length: float | None = Field(default=None, gt=0, json_schema_extra={"example": 18.0})
    width: float | None = Field(default=None, gt=0, json_schema_extra={"example": 12.0})
    height: float | None = Field(default=None, gt=0, json_schema_extra={"example": 16.5})
    top_length: float | None = Field(default=None, gt=0, json_schema_extra={"example": 24.0})
    top_width: float | None = Field(default=None, gt=0, json_schema_extra={"example": 16.0})
    bottom_length: float | None = Field(default=None, gt=0, json_schema_extra={"example": 20.5})
    bottom_width: float | None = Field(default=None, gt=0, json_schema_extra={"example": 13.5})


class ContainerTypeCreateSchema(ContainerTypeDimensionsSchema):
    """Schema for creating a new container type."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Unique display name",
        json_schema_extra={"example": "17 Gallon Tote"}
    )
    code_prefix: str = Field(
        ...,
        min_length=1,
        max_length=12,
        pattern=CODE_PREFIX_PATTERN,
        description="Prefix used in container codes of this type; stored upper-case",
        json_schema_extra={"example": "TOTE17"}
    )
    icon_key: IconKey | None = Field(
        default=None,
        description="Icon shown for containers of this type",
        json_schema_extra={"example": "tote"}
    )
    description: str | None = None

    @field_validator("code_prefix")
    @classmethod
    def uppercase_prefix(cls, value: str) -> str:
        return value.upper()


class ContainerTypeUpdateSchema(ContainerTypeDimensionsSchema):
    """Schema for updating a container type; omitted fields stay unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    code_prefix: str | None = Field(default=None, min_length=1, max_length=12, pattern=CODE_PREFIX_PATTERN)
    icon_key: IconKey | None = None
    description: str | None = None

    @field_validator("code_prefix")
    @classmethod
    def uppercase_prefix(cls, value: str | None) -> str | None:
        return value.upper() if value is not None else None


class ContainerTypeSummarySchema(BaseModel):
    """Lightweight type reference embedded in container payloads."""

    id: int
    name: str
    code_prefix: str
    icon_key: str | None

    model_config = ConfigDict(from_attributes=True)


class ContainerTypeResponseSchema(ContainerTypeDimensionsSchema):
    """Schema for full container type details."""

    id: int = Field(description="Container type identifier", json_schema_extra={"example": 1})
    name: str
    code_prefix: str
    icon_key: str | None
    description: str | None
    capacity: float | None = Field(
        description="Capacity in cubic inches derived from the dimensions",
        json_schema_extra={"example": 5396.25}
    )
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def capacity_display(self) -> str | None:
        return format_volume(self.capacity) if self.capacity else None


class ContainerTypeWithUsageSchema(ContainerTypeResponseSchema):
    container_count: int = Field(description="Containers using this type")


class RecalculateCapacitiesResponseSchema(BaseModel):
    updated: int = Field(description="Number of types whose capacity changed")
