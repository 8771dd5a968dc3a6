"""Rack model for the tote inventory."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tote_inventory.extensions import db

if TYPE_CHECKING:
    from tote_inventory.models.location import Location
    from tote_inventory.models.slot import Slot


class Rack(db.Model):  # type: ignore[name-defined]
    """Model representing a shelving grid of rows x cols slots at a location."""

    __tablename__ = "racks"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    rows: Mapped[int] = mapped_column(nullable=False)
    cols: Mapped[int] = mapped_column(nullable=False)
    location_id: Mapped[int] = mapped_column(
        ForeignKey("locations.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint("rows >= 1", name="ck_racks_rows_positive"),
        CheckConstraint("cols >= 1", name="ck_racks_cols_positive"),
    )

    # Relationships
    location: Mapped["Location"] = relationship(back_populates="racks")
    slots: Mapped[list["Slot"]] = relationship(  # type: ignore[assignment]
        "Slot",
        back_populates="rack",
        cascade="all, delete-orphan",
        order_by="(Slot.row, Slot.col)",
    )

    @property
    def slot_count(self) -> int:
        return self.rows * self.cols

    def __repr__(self) -> str:
        return f"<Rack {self.id}: {self.name} ({self.rows}x{self.cols})>"
