"""Placement service enforcing the slot occupancy rules.

A slot holds at most one occupant, and the occupant's ``current_slot_id``
always points back at the slot holding it. A container is either racked,
nested inside another container or unplaced, never two of these at once.
Every method here keeps both sides of those links in step within the
current transaction.

Slot rows are read with ``SELECT ... FOR UPDATE`` and carry a version
counter, so two requests racing for the same slot cannot both win: the
loser gets a ``ConcurrentUpdateException``.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from tote_inventory.exceptions import (
    ConcurrentUpdateException,
    InvalidOperationException,
    RecordNotFoundException,
    SlotOccupiedException,
)
from tote_inventory.models.container import Container
from tote_inventory.models.item import Item
from tote_inventory.models.slot import Slot
from tote_inventory.services.base import BaseService
from tote_inventory.services.metrics_service import MetricsServiceProtocol

logger = logging.getLogger(__name__)


@dataclass
class ConsistencyIssue:
    """One violated placement invariant."""

    kind: str
    message: str
    slot_id: int | None = None
    container_id: int | None = None
    item_id: int | None = None


class PlacementService(BaseService):
    """Service class for putting containers and container-items into slots."""

    def __init__(self, db: Session, metrics_service: MetricsServiceProtocol):
        super().__init__(db)
        self.metrics_service = metrics_service

    # Containers

    def assign_container_to_slot(self, container_id: int, slot_id: int) -> Slot:
        """Put a container into a slot, releasing whatever slot or parent it had.

        Re-assigning a container to the slot it already holds is a no-op.
        """
        container = self._get_container(container_id)
        slot = self._lock_slot(slot_id)

        if slot.container_id == container.id and container.current_slot_id == slot.id:
            self.metrics_service.record_placement("container", "unchanged")
            return slot

        if slot.is_occupied and slot.container_id != container.id:
            self.metrics_service.record_placement("container", "occupied")
            raise SlotOccupiedException(slot.label, self._describe_occupant(slot))

        self._release_container_slot(container)
        container.parent_container_id = None
        self._flush("Slot", slot.id)

        slot.container_id = container.id
        container.current_slot_id = slot.id
        self._flush("Slot", slot.id)

        self.metrics_service.record_placement("container", "assigned")
        logger.info(
            f"Container {container.code} placed in slot {slot.label} of rack {slot.rack_id}"
        )
        return slot

    def assign_container_to_parent(
        self, container_id: int, parent_id: int | None
    ) -> Container:
        """Nest a container inside another one, or un-nest it when ``parent_id`` is None.

        Nesting releases the container's slot. A container can never end up
        inside itself, directly or through its descendants.
        """
        container = self._get_container(container_id)

        if parent_id is None:
            container.parent_container_id = None
            self._flush("Container", container.id)
            self.metrics_service.record_placement("parent", "released")
            logger.info(f"Container {container.code} removed from its parent")
            return container

        if parent_id == container.id:
            self.metrics_service.record_placement("parent", "rejected")
            raise InvalidOperationException(
                f"nest container {container.code}", "a container cannot contain itself"
            )

        parent = self._get_container(parent_id)
        if self._is_ancestor(container.id, parent):
            self.metrics_service.record_placement("parent", "rejected")
            raise InvalidOperationException(
                f"nest container {container.code} inside {parent.code}",
                f"{parent.code} is already inside {container.code}",
            )

        if container.parent_container_id == parent.id:
            self.metrics_service.record_placement("parent", "unchanged")
            return container

        self._release_container_slot(container)
        container.parent_container_id = parent.id
        self._flush("Container", container.id)

        self.metrics_service.record_placement("parent", "assigned")
        logger.info(f"Container {container.code} nested inside {parent.code}")
        return container

    def unassign_container(self, container_id: int) -> Container:
        """Take a container out of its slot and out of its parent."""
        container = self._get_container(container_id)
        self._release_container_slot(container)
        container.parent_container_id = None
        self._flush("Container", container.id)

        self.metrics_service.record_placement("container", "released")
        logger.info(f"Container {container.code} unplaced")
        return container

    def release_container(self, container: Container) -> None:
        """Free the slot held by ``container`` ahead of deleting it."""
        self._release_container_slot(container)
        self._flush("Container", container.id)

    # Container-items

    def assign_item_to_slot(self, item_id: int, slot_id: int) -> Slot:
        """Put a container-item into a slot, releasing its previous slot."""
        item = self._get_item(item_id)
        if not item.is_container:
            raise InvalidOperationException(
                f"place item {item.name} in a slot",
                "only items that act as containers can occupy a rack slot",
            )

        slot = self._lock_slot(slot_id)

        if slot.item_id == item.id and item.current_slot_id == slot.id:
            self.metrics_service.record_placement("item", "unchanged")
            return slot

        if slot.is_occupied and slot.item_id != item.id:
            self.metrics_service.record_placement("item", "occupied")
            raise SlotOccupiedException(slot.label, self._describe_occupant(slot))

        self._release_item_slot(item)
        self._flush("Slot", slot.id)

        slot.item_id = item.id
        item.current_slot_id = slot.id
        self._flush("Slot", slot.id)

        self.metrics_service.record_placement("item", "assigned")
        logger.info(f"Item {item.name} placed in slot {slot.label} of rack {slot.rack_id}")
        return slot

    def unassign_item(self, item_id: int) -> Item:
        item = self._get_item(item_id)
        if item.current_slot_id is None:
            return item

        self._release_item_slot(item)
        self._flush("Item", item.id)

        self.metrics_service.record_placement("item", "released")
        logger.info(f"Item {item.name} removed from its slot")
        return item

    # Auditing

    def check_consistency(self) -> list[ConsistencyIssue]:
        """List every placement invariant currently violated in the database."""
        issues: list[ConsistencyIssue] = []

        containers = {c.id: c for c in self.db.execute(select(Container)).scalars()}
        items = {i.id: i for i in self.db.execute(select(Item)).scalars()}
        slots = {s.id: s for s in self.db.execute(select(Slot)).scalars()}

        for slot in slots.values():
            if slot.container_id is not None and slot.item_id is not None:
                issues.append(ConsistencyIssue(
                    kind="slot_double_occupied",
                    message=f"Slot {slot.id} holds both container {slot.container_id} and item {slot.item_id}",
                    slot_id=slot.id,
                ))
            if slot.container_id is not None:
                occupant = containers.get(slot.container_id)
                if occupant is None or occupant.current_slot_id != slot.id:
                    issues.append(ConsistencyIssue(
                        kind="slot_container_mismatch",
                        message=f"Slot {slot.id} names container {slot.container_id} which does not point back",
                        slot_id=slot.id,
                        container_id=slot.container_id,
                    ))
            if slot.item_id is not None:
                occupant_item = items.get(slot.item_id)
                if occupant_item is None or occupant_item.current_slot_id != slot.id:
                    issues.append(ConsistencyIssue(
                        kind="slot_item_mismatch",
                        message=f"Slot {slot.id} names item {slot.item_id} which does not point back",
                        slot_id=slot.id,
                        item_id=slot.item_id,
                    ))

        for container in containers.values():
            if container.current_slot_id is not None and container.parent_container_id is not None:
                issues.append(ConsistencyIssue(
                    kind="container_racked_and_nested",
                    message=f"Container {container.code} is both in a slot and inside container {container.parent_container_id}",
                    container_id=container.id,
                ))
            if container.current_slot_id is not None:
                slot = slots.get(container.current_slot_id)
                if slot is None or slot.container_id != container.id:
                    issues.append(ConsistencyIssue(
                        kind="container_slot_mismatch",
                        message=f"Container {container.code} points at slot {container.current_slot_id} which does not hold it",
                        slot_id=container.current_slot_id,
                        container_id=container.id,
                    ))
            if container.parent_container_id is not None and self._has_parent_cycle(container, containers):
                issues.append(ConsistencyIssue(
                    kind="container_nesting_cycle",
                    message=f"Container {container.code} is nested inside itself",
                    container_id=container.id,
                ))

        for item in items.values():
            if item.current_slot_id is None:
                continue
            if not item.is_container:
                issues.append(ConsistencyIssue(
                    kind="item_not_container_racked",
                    message=f"Item {item.name} holds a slot but is not a container",
                    slot_id=item.current_slot_id,
                    item_id=item.id,
                ))
            slot = slots.get(item.current_slot_id)
            if slot is None or slot.item_id != item.id:
                issues.append(ConsistencyIssue(
                    kind="item_slot_mismatch",
                    message=f"Item {item.name} points at slot {item.current_slot_id} which does not hold it",
                    slot_id=item.current_slot_id,
                    item_id=item.id,
                ))

        if issues:
            logger.warning(f"Placement consistency check found {len(issues)} issue(s)")
        return issues

    # Helpers

    def _get_container(self, container_id: int) -> Container:
        container = self.db.get(Container, container_id)
        if not container:
            raise RecordNotFoundException("Container", container_id)
        return container

    def _get_item(self, item_id: int) -> Item:
        item = self.db.get(Item, item_id)
        if not item:
            raise RecordNotFoundException("Item", item_id)
        return item

    def _lock_slot(self, slot_id: int) -> Slot:
        stmt = select(Slot).where(Slot.id == slot_id).with_for_update()
        slot = self.db.execute(stmt).scalar_one_or_none()
        if not slot:
            raise RecordNotFoundException("Slot", slot_id)
        return slot

    def _release_container_slot(self, container: Container) -> None:
        if container.current_slot_id is None:
            return
        slot = self._lock_slot(container.current_slot_id)
        if slot.container_id == container.id:
            slot.container_id = None
        container.current_slot_id = None

    def _release_item_slot(self, item: Item) -> None:
        if item.current_slot_id is None:
            return
        slot = self._lock_slot(item.current_slot_id)
        if slot.item_id == item.id:
            slot.item_id = None
        item.current_slot_id = None

    def _describe_occupant(self, slot: Slot) -> str:
        if slot.container_id is not None:
            occupant = self.db.get(Container, slot.container_id)
            return f"container {occupant.code if occupant else slot.container_id}"
        occupant_item = self.db.get(Item, slot.item_id)
        return f"item {occupant_item.name if occupant_item else slot.item_id}"

    def _is_ancestor(self, container_id: int, candidate: Container) -> bool:
        """True when ``container_id`` is ``candidate`` or one of its ancestors."""
        seen: set[int] = set()
        node: Container | None = candidate
        while node is not None and node.id not in seen:
            if node.id == container_id:
                return True
            seen.add(node.id)
            node = (
                self.db.get(Container, node.parent_container_id)
                if node.parent_container_id is not None
                else None
            )
        return False

    @staticmethod
    def _has_parent_cycle(container: Container, containers: dict[int, Container]) -> bool:
        seen = {container.id}
        parent_id = container.parent_container_id
        while parent_id is not None:
            if parent_id in seen:
                return parent_id == container.id
            seen.add(parent_id)
            parent = containers.get(parent_id)
            parent_id = parent.parent_container_id if parent else None
        return False

    def _flush(self, resource_type: str, identifier: int) -> None:
        try:
            self.db.flush()
        except StaleDataError as e:
            self.metrics_service.record_placement(resource_type.lower(), "conflict")
            logger.warning(f"Concurrent update on {resource_type} {identifier}: {e}")
            raise ConcurrentUpdateException(resource_type, identifier) from e
        except IntegrityError as e:
            self.metrics_service.record_placement(resource_type.lower(), "conflict")
            logger.warning(f"Placement constraint violated for {resource_type} {identifier}: {e.orig}")
            raise ConcurrentUpdateException(resource_type, identifier) from e
