"""Location model for the tote inventory."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tote_inventory.extensions import db

if TYPE_CHECKING:
    from tote_inventory.models.rack import Rack


class Location(db.Model):  # type: ignore[name-defined]
    """Model representing a named physical site such as a garage or basement."""

    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    racks: Mapped[list["Rack"]] = relationship(  # type: ignore[assignment]
        "Rack", back_populates="location", order_by="Rack.name"
    )

    def __repr__(self) -> str:
        return f"<Location {self.id}: {self.name}>"
