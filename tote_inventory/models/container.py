"""Container model for the tote inventory."""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import JSON, CheckConstraint, ForeignKey, String, Text, func
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tote_inventory.extensions import db
from tote_inventory.models.placement import Placement, placement_from_columns

if TYPE_CHECKING:
    from tote_inventory.models.container_type import ContainerType
    from tote_inventory.models.item import Item
    from tote_inventory.models.slot import Slot


class ContainerStatus(str, Enum):
    """Lifecycle status for a container."""

    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


class Container(db.Model):  # type: ignore[name-defined]
    """Model representing a physical tote, bin or box identified by its QR code."""

    __tablename__ = "containers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[ContainerStatus] = mapped_column(
        SQLEnum(
            ContainerStatus,
            name="container_status",
            values_callable=lambda enum_cls: [item.value for item in enum_cls],
            native_enum=False,
        ),
        nullable=False,
        default=ContainerStatus.ACTIVE,
        server_default=ContainerStatus.ACTIVE.value,
        index=True,
    )
    tags: Mapped[list[str] | None] = mapped_column(
        postgresql.ARRAY(Text).with_variant(JSON, "sqlite"), nullable=True
    )
    current_slot_id: Mapped[int | None] = mapped_column(
        ForeignKey(
            "slots.id",
            name="fk_containers_current_slot_id",
            use_alter=True,
        ),
        nullable=True,
        unique=True,
    )
    parent_container_id: Mapped[int | None] = mapped_column(
        ForeignKey("containers.id"), nullable=True, index=True
    )
    container_type_id: Mapped[int | None] = mapped_column(
        ForeignKey("container_types.id"), nullable=True, index=True
    )
    # Free-text type from older data; only read by the type backfill
    legacy_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint(
            "current_slot_id IS NULL OR parent_container_id IS NULL",
            name="ck_containers_racked_xor_nested",
        ),
        CheckConstraint(
            "parent_container_id IS NULL OR parent_container_id != id",
            name="ck_containers_not_self_nested",
        ),
    )

    # Relationships
    container_type: Mapped["ContainerType | None"] = relationship(
        "ContainerType", back_populates="containers"
    )
    current_slot: Mapped["Slot | None"] = relationship(
        "Slot", foreign_keys=[current_slot_id], viewonly=True
    )
    parent: Mapped["Container | None"] = relationship(
        "Container",
        remote_side=[id],
        foreign_keys=[parent_container_id],
        viewonly=True,
    )
    children: Mapped[list["Container"]] = relationship(  # type: ignore[assignment]
        "Container",
        foreign_keys=[parent_container_id],
        viewonly=True,
        order_by="Container.code",
    )
    items: Mapped[list["Item"]] = relationship(  # type: ignore[assignment]
        "Item", back_populates="container", order_by="Item.name"
    )

    @property
    def placement(self) -> Placement:
        return placement_from_columns(self.current_slot_id, self.parent_container_id)

    @property
    def capacity(self) -> float | None:
        if self.container_type is None:
            return None
        return self.container_type.capacity

    def __repr__(self) -> str:
        return f"<Container {self.code}: {self.label}>"
