"""Schemas for administrative endpoints: seeding, migration, import and accounts."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tote_inventory.models.user import PendingUserStatus, UserRole


class SeedResultSchema(BaseModel):
    """Outcome of seeding the container type catalog."""

    created: int = Field(json_schema_extra={"example": 10})
    updated: int = Field(json_schema_extra={"example": 0})

    model_config = ConfigDict(from_attributes=True)


class MigrationQuerySchema(BaseModel):
    apply: bool = Field(
        default=False,
        description="Write the matches; otherwise only report them",
    )


class MigrationDetailSchema(BaseModel):
    container_id: int
    container_code: str
    legacy_type: str
    matched_type_name: str | None
    matched_type_id: int | None
    error: str | None = None

    model_config = ConfigDict(from_attributes=True)


class MigrationResultSchema(BaseModel):
    """Outcome of matching untyped containers to container types."""

    dry_run: bool
    total_containers: int
    matched: int
    unmatched: int
    failed: int = 0
    details: list[MigrationDetailSchema]

    model_config = ConfigDict(from_attributes=True)


class ImportRowErrorSchema(BaseModel):
    row_number: int = Field(description="1-based line number in the file, header included")
    message: str

    model_config = ConfigDict(from_attributes=True)


class ImportResultSchema(BaseModel):
    """Counts for one CSV import run."""

    rows_total: int
    items_created: int
    duplicates: int
    skipped: int
    failed: int
    containers_created: int
    locations_created: int
    photos_created: int
    errors: list[ImportRowErrorSchema]

    model_config = ConfigDict(from_attributes=True)


class ConsistencyIssueSchema(BaseModel):
    kind: str = Field(json_schema_extra={"example": "slot_container_mismatch"})
    message: str
    slot_id: int | None
    container_id: int | None
    item_id: int | None

    model_config = ConfigDict(from_attributes=True)


class ConsistencyReportSchema(BaseModel):
    consistent: bool
    issues: list[ConsistencyIssueSchema]


class UserResponseSchema(BaseModel):
    id: int
    email: str
    name: str | None
    role: UserRole
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SeededAccountsSchema(BaseModel):
    admin: UserResponseSchema
    user: UserResponseSchema

    model_config = ConfigDict(from_attributes=True)


class PendingUserCreateSchema(BaseModel):
    """Registration request submitted by a prospective user."""

    name: str = Field(..., min_length=2, max_length=255, json_schema_extra={"example": "Sam Rivera"})
    email: str = Field(
        ...,
        max_length=255,
        pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
        json_schema_extra={"example": "sam@example.com"}
    )
    reason: str | None = Field(default=None, json_schema_extra={"example": "Helping sort the garage"})


class PendingUserResponseSchema(BaseModel):
    id: int
    email: str
    name: str | None
    reason: str | None
    status: PendingUserStatus
    created_at: datetime
    processed_at: datetime | None

    model_config = ConfigDict(from_attributes=True)
