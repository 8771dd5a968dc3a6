"""Container type model for the tote inventory."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Float, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tote_inventory.extensions import db

if TYPE_CHECKING:
    from tote_inventory.models.container import Container


class ContainerType(db.Model):  # type: ignore[name-defined]
    """Catalog entry describing a standard container shape.

    Dimensions are in inches. A type is either rectangular (length, width,
    height) or tapered (top and bottom footprints plus height); capacity in
    cubic inches is derived from whichever set is complete.
    """

    __tablename__ = "container_types"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    code_prefix: Mapped[str] = mapped_column(String(12), nullable=False, index=True)
    icon_key: Mapped[str | None] = mapped_column(String(20), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    length: Mapped[float | None] = mapped_column(Float, nullable=True)
    width: Mapped[float | None] = mapped_column(Float, nullable=True)
    height: Mapped[float | None] = mapped_column(Float, nullable=True)
    top_length: Mapped[float | None] = mapped_column(Float, nullable=True)
    top_width: Mapped[float | None] = mapped_column(Float, nullable=True)
    bottom_length: Mapped[float | None] = mapped_column(Float, nullable=True)
    bottom_width: Mapped[float | None] = mapped_column(Float, nullable=True)
    capacity: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    containers: Mapped[list["Container"]] = relationship(  # type: ignore[assignment]
        "Container", back_populates="container_type"
    )

    @property
    def is_tapered(self) -> bool:
        return None not in (
            self.top_length,
            self.top_width,
            self.bottom_length,
            self.bottom_width,
        )

    def __repr__(self) -> str:
        return f"<ContainerType {self.code_prefix}: {self.name}>"
