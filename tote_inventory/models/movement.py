"""Movement model recording item check-outs, check-ins, moves and removals."""

from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tote_inventory.extensions import db

if TYPE_CHECKING:
    from tote_inventory.models.container import Container
    from tote_inventory.models.item import Item
    from tote_inventory.models.user import User


class MovementAction(str, Enum):
    CHECK_OUT = "check_out"
    CHECK_IN = "check_in"
    MOVE = "move"
    REMOVE = "remove"


class Movement(db.Model):  # type: ignore[name-defined]
    """Append-only audit row for one item state transition."""

    __tablename__ = "movements"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    item_id: Mapped[int] = mapped_column(
        ForeignKey("items.id"), nullable=False, index=True
    )
    action: Mapped[MovementAction] = mapped_column(
        SQLEnum(
            MovementAction,
            name="movement_action",
            values_callable=lambda enum_cls: [a.value for a in enum_cls],
            native_enum=False,
        ),
        nullable=False,
    )
    from_container_id: Mapped[int | None] = mapped_column(
        ForeignKey("containers.id"), nullable=True
    )
    to_container_id: Mapped[int | None] = mapped_column(
        ForeignKey("containers.id"), nullable=True
    )
    actor_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        nullable=False, default=lambda: datetime.now(UTC), index=True
    )

    # Relationships
    item: Mapped["Item"] = relationship("Item", back_populates="movements")
    from_container: Mapped["Container | None"] = relationship(
        "Container", foreign_keys=[from_container_id]
    )
    to_container: Mapped["Container | None"] = relationship(
        "Container", foreign_keys=[to_container_id]
    )
    actor: Mapped["User | None"] = relationship("User")

    def __repr__(self) -> str:
        return f"<Movement {self.action.value} item={self.item_id}>"
