"""Item model for the tote inventory."""

from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Float,
    ForeignKey,
    String,
    Text,
    false,
    func,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tote_inventory.extensions import db
from tote_inventory.models.placement import Placement, Racked, Unplaced

if TYPE_CHECKING:
    from tote_inventory.models.container import Container
    from tote_inventory.models.item_photo import ItemPhoto
    from tote_inventory.models.movement import Movement
    from tote_inventory.models.slot import Slot


class ItemStatus(str, Enum):
    """Where an item currently is from the owner's point of view."""

    IN_STORAGE = "IN_STORAGE"
    CHECKED_OUT = "CHECKED_OUT"
    IN_USE = "IN_USE"
    DISCARDED = "DISCARDED"


class ItemCategory(str, Enum):
    BOOKS = "BOOKS"
    GAMES_HOBBIES = "GAMES_HOBBIES"
    CAMPING_OUTDOORS = "CAMPING_OUTDOORS"
    TOOLS_GEAR = "TOOLS_GEAR"
    COOKING = "COOKING"
    CLEANING = "CLEANING"
    ELECTRONICS = "ELECTRONICS"
    LIGHTS = "LIGHTS"
    FIRST_AID = "FIRST_AID"
    EMERGENCY = "EMERGENCY"
    CLOTHES = "CLOTHES"
    CORDAGE = "CORDAGE"
    TECH_MEDIA = "TECH_MEDIA"
    MISC = "MISC"


class ItemCondition(str, Enum):
    UNOPENED = "UNOPENED"
    OPENED_COMPLETE = "OPENED_COMPLETE"
    OPENED_MISSING = "OPENED_MISSING"
    USED = "USED"
    DAMAGED = "DAMAGED"


def _enum_column(enum_cls: type[Enum], name: str) -> SQLEnum:
    return SQLEnum(
        enum_cls,
        name=name,
        values_callable=lambda cls: [member.value for member in cls],
        native_enum=False,
    )


class Item(db.Model):  # type: ignore[name-defined]
    """Model representing a physical object stored in a container.

    Items flagged ``is_container`` stand on their own (a cooler, a tool
    case) and may occupy a rack slot directly; they never sit inside a
    container's item list.
    """

    __tablename__ = "items"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[ItemStatus] = mapped_column(
        _enum_column(ItemStatus, "item_status"),
        nullable=False,
        default=ItemStatus.IN_STORAGE,
        server_default=ItemStatus.IN_STORAGE.value,
        index=True,
    )
    category: Mapped[ItemCategory | None] = mapped_column(
        _enum_column(ItemCategory, "item_category"), nullable=True, index=True
    )
    condition: Mapped[ItemCondition | None] = mapped_column(
        _enum_column(ItemCondition, "item_condition"), nullable=True
    )
    isbn: Mapped[str | None] = mapped_column(String(32), nullable=True)
    quantity: Mapped[int] = mapped_column(nullable=False, default=1, server_default="1")
    tags: Mapped[list[str] | None] = mapped_column(
        postgresql.ARRAY(Text).with_variant(JSON, "sqlite"), nullable=True
    )
    volume: Mapped[float | None] = mapped_column(Float, nullable=True)
    expiration_date: Mapped[date | None] = mapped_column(nullable=True)
    container_id: Mapped[int | None] = mapped_column(
        ForeignKey("containers.id"), nullable=True, index=True
    )
    # Source row key for CSV imports; re-importing the same row is a no-op
    import_key: Mapped[str | None] = mapped_column(
        String(512), nullable=True, unique=True
    )
    is_container: Mapped[bool] = mapped_column(
        nullable=False, default=False, server_default=false()
    )
    current_slot_id: Mapped[int | None] = mapped_column(
        ForeignKey("slots.id", name="fk_items_current_slot_id", use_alter=True),
        nullable=True,
        unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_items_quantity_positive"),
        CheckConstraint(
            "volume IS NULL OR volume >= 0", name="ck_items_volume_non_negative"
        ),
        CheckConstraint(
            "is_container = false OR container_id IS NULL",
            name="ck_items_container_item_not_nested",
        ),
        CheckConstraint(
            "is_container = true OR current_slot_id IS NULL",
            name="ck_items_only_container_items_racked",
        ),
    )

    # Relationships
    container: Mapped["Container | None"] = relationship(
        "Container", back_populates="items"
    )
    current_slot: Mapped["Slot | None"] = relationship(
        "Slot", foreign_keys=[current_slot_id], viewonly=True
    )
    photos: Mapped[list["ItemPhoto"]] = relationship(  # type: ignore[assignment]
        "ItemPhoto",
        back_populates="item",
        cascade="all, delete-orphan",
        order_by="ItemPhoto.id",
    )
    movements: Mapped[list["Movement"]] = relationship(  # type: ignore[assignment]
        "Movement", back_populates="item", order_by="Movement.timestamp"
    )

    @property
    def placement(self) -> Placement:
        if self.current_slot_id is not None:
            return Racked(self.current_slot_id)
        return Unplaced()

    def __repr__(self) -> str:
        return f"<Item {self.id}: {self.name}>"
