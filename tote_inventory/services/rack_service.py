"""Rack service for shelving grids and their slots."""

from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from tote_inventory.exceptions import (
    InvalidOperationException,
    RecordNotFoundException,
    ResourceConflictException,
)
from tote_inventory.models.container import Container, ContainerStatus
from tote_inventory.models.item import Item
from tote_inventory.models.rack import Rack
from tote_inventory.models.slot import Slot
from tote_inventory.services.base import BaseService
from tote_inventory.services.location_service import LocationService
from tote_inventory.utils.slot_labels import slot_position


@dataclass
class RackGridData:
    """A rack with its slots plus everything that could be dropped onto it."""

    rack: Rack
    slots: list[Slot]
    unplaced_containers: list[Container]
    unplaced_container_items: list[Item]


class RackService(BaseService):
    """Service class for rack management operations."""

    def __init__(self, db, location_service: LocationService):
        super().__init__(db)
        self.location_service = location_service

    def create_rack(self, name: str, rows: int, cols: int, location_id: int) -> Rack:
        """Create a rack together with its full rows x cols slot grid."""
        if rows < 1 or cols < 1:
            raise InvalidOperationException(
                f"create rack {name}", "rows and cols must both be at least 1"
            )

        name = name.strip()
        if self._find_by_name(name) is not None:
            raise ResourceConflictException("Rack", f"name {name}")

        location = self.location_service.get_location(location_id)

        rack = Rack(name=name, rows=rows, cols=cols, location_id=location.id)
        self.db.add(rack)
        self.db.flush()

        slots = []
        for index in range(rows * cols):
            row, col = slot_position(index, cols)
            slots.append(Slot(rack_id=rack.id, row=row, col=col))
        self.db.add_all(slots)
        self.db.flush()

        self.db.expire(rack, ["slots"])
        return rack

    def get_rack(self, rack_id: int) -> Rack:
        rack = self.db.get(Rack, rack_id)
        if not rack:
            raise RecordNotFoundException("Rack", rack_id)
        return rack

    def get_all_racks(self, location_id: int | None = None) -> list[Rack]:
        stmt = select(Rack).order_by(Rack.name)
        if location_id is not None:
            stmt = stmt.where(Rack.location_id == location_id)
        return list(self.db.execute(stmt).scalars().all())

    def update_rack(
        self, rack_id: int, name: str | None = None, location_id: int | None = None
    ) -> Rack:
        """Rename or relocate a rack. The slot grid is fixed at creation."""
        rack = self.get_rack(rack_id)

        if name is not None:
            name = name.strip()
            existing = self._find_by_name(name)
            if existing is not None and existing.id != rack.id:
                raise ResourceConflictException("Rack", f"name {name}")
            rack.name = name
        if location_id is not None:
            rack.location_id = self.location_service.get_location(location_id).id

        self.db.flush()
        return rack

    def delete_rack(self, rack_id: int) -> None:
        """Delete a rack whose slots are all empty; the slots go with it."""
        rack = self.get_rack(rack_id)

        occupied = self.db.execute(
            select(Slot)
            .where(
                Slot.rack_id == rack.id,
                (Slot.container_id.is_not(None)) | (Slot.item_id.is_not(None)),
            )
            .order_by(Slot.row, Slot.col)
            .limit(1)
        ).scalar_one_or_none()
        if occupied is not None:
            raise InvalidOperationException(
                f"delete rack {rack.name}",
                f"slot {occupied.label} is still occupied",
            )

        self.db.delete(rack)
        self.db.flush()

    def get_slot(self, slot_id: int) -> Slot:
        slot = self.db.get(Slot, slot_id)
        if not slot:
            raise RecordNotFoundException("Slot", slot_id)
        return slot

    def get_rack_grid(self, rack_id: int) -> RackGridData:
        rack = self.get_rack(rack_id)

        slots = list(
            self.db.execute(
                select(Slot)
                .where(Slot.rack_id == rack.id)
                .options(
                    selectinload(Slot.container).selectinload(Container.container_type),
                    selectinload(Slot.item),
                )
                .order_by(Slot.row, Slot.col)
            ).scalars().all()
        )

        unplaced_containers = list(
            self.db.execute(
                select(Container)
                .where(
                    Container.current_slot_id.is_(None),
                    Container.parent_container_id.is_(None),
                    Container.status == ContainerStatus.ACTIVE,
                )
                .options(selectinload(Container.container_type))
                .order_by(Container.code)
            ).scalars().all()
        )

        unplaced_container_items = list(
            self.db.execute(
                select(Item)
                .where(Item.is_container.is_(True), Item.current_slot_id.is_(None))
                .order_by(Item.name)
            ).scalars().all()
        )

        return RackGridData(
            rack=rack,
            slots=slots,
            unplaced_containers=unplaced_containers,
            unplaced_container_items=unplaced_container_items,
        )

    def _find_by_name(self, name: str) -> Rack | None:
        stmt = select(Rack).where(Rack.name == name)
        return self.db.execute(stmt).scalar_one_or_none()
