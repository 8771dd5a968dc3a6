"""Slot model for the tote inventory."""

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tote_inventory.extensions import db
from tote_inventory.utils.slot_labels import format_slot_label

if TYPE_CHECKING:
    from tote_inventory.models.container import Container
    from tote_inventory.models.item import Item
    from tote_inventory.models.rack import Rack


class Slot(db.Model):  # type: ignore[name-defined]
    """Model representing one grid cell of a rack.

    A slot holds at most one occupant: either a container or an item that
    acts as a container. The occupant columns mirror the occupant's
    ``current_slot_id``; ``PlacementService`` keeps both sides in step.
    """

    __tablename__ = "slots"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    rack_id: Mapped[int] = mapped_column(
        ForeignKey("racks.id", ondelete="CASCADE"), nullable=False
    )
    row: Mapped[int] = mapped_column(nullable=False)
    col: Mapped[int] = mapped_column(nullable=False)
    container_id: Mapped[int | None] = mapped_column(
        ForeignKey("containers.id"), nullable=True, unique=True
    )
    item_id: Mapped[int | None] = mapped_column(
        ForeignKey("items.id"), nullable=True, unique=True
    )
    version: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=1,
        server_default="1",
    )

    __table_args__ = (
        UniqueConstraint("rack_id", "row", "col", name="uq_slots_rack_row_col"),
        CheckConstraint(
            "container_id IS NULL OR item_id IS NULL",
            name="ck_slots_single_occupant",
        ),
    )

    __mapper_args__ = {"version_id_col": version}

    # Relationships
    rack: Mapped["Rack"] = relationship(back_populates="slots")
    container: Mapped["Container | None"] = relationship(
        "Container", foreign_keys=[container_id], viewonly=True
    )
    item: Mapped["Item | None"] = relationship(
        "Item", foreign_keys=[item_id], viewonly=True
    )

    @property
    def label(self) -> str:
        return format_slot_label(self.row, self.col)

    @property
    def is_occupied(self) -> bool:
        return self.container_id is not None or self.item_id is not None

    def __repr__(self) -> str:
        return f"<Slot {self.rack_id}:{self.label}>"
