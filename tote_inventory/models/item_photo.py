"""Item photo model."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tote_inventory.extensions import db

if TYPE_CHECKING:
    from tote_inventory.models.item import Item


class ItemPhoto(db.Model):  # type: ignore[name-defined]
    """Externally hosted photo of an item."""

    __tablename__ = "item_photos"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    item_id: Mapped[int] = mapped_column(
        ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True
    )
    url: Mapped[str] = mapped_column(String(2000), nullable=False)
    caption: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now()
    )

    item: Mapped["Item"] = relationship("Item", back_populates="photos")

    def __repr__(self) -> str:
        return f"<ItemPhoto {self.id} item={self.item_id}>"
