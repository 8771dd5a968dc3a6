"""Global search schemas."""

from pydantic import BaseModel, ConfigDict, Field

from tote_inventory.models.item import ItemStatus


class SearchQuerySchema(BaseModel):
    q: str = Field(
        default="",
        max_length=200,
        description="Search text; fewer than 2 characters returns nothing",
        json_schema_extra={"example": "stove"}
    )


class ContainerHitSchema(BaseModel):
    id: int
    label: str
    code: str
    type_name: str | None
    location_name: str = Field(json_schema_extra={"example": "Unassigned"})
    rack_name: str | None

    model_config = ConfigDict(from_attributes=True)


class ItemHitSchema(BaseModel):
    id: int
    name: str
    description: str | None
    status: ItemStatus
    container_id: int | None
    container_label: str | None

    model_config = ConfigDict(from_attributes=True)


class LocationHitSchema(BaseModel):
    id: int
    name: str
    rack_count: int

    model_config = ConfigDict(from_attributes=True)


class SearchResultsSchema(BaseModel):
    """Matches grouped by kind, each list capped independently."""

    containers: list[ContainerHitSchema]
    items: list[ItemHitSchema]
    locations: list[LocationHitSchema]

    model_config = ConfigDict(from_attributes=True)
