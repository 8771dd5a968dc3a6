"""Item service covering item details, photos and movements."""

import logging
from datetime import date

import validators
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from tote_inventory.exceptions import (
    ConfirmationRequiredException,
    DependencyException,
    InvalidOperationException,
    RecordNotFoundException,
)
from tote_inventory.models.container import Container
from tote_inventory.models.item import Item, ItemCategory, ItemCondition, ItemStatus
from tote_inventory.models.item_photo import ItemPhoto
from tote_inventory.models.movement import Movement, MovementAction
from tote_inventory.models.user import User
from tote_inventory.services.base import BaseService
from tote_inventory.services.metrics_service import MetricsServiceProtocol
from tote_inventory.services.placement_service import PlacementService

logger = logging.getLogger(__name__)


class ItemService(BaseService):
    """Service class for item management operations.

    Check-out, check-in, move and remove each write exactly one ``Movement``
    row in the same transaction as the state change it records.
    """

    def __init__(
        self,
        db: Session,
        placement_service: PlacementService,
        metrics_service: MetricsServiceProtocol,
    ):
        super().__init__(db)
        self.placement_service = placement_service
        self.metrics_service = metrics_service

    def create_item(
        self,
        name: str,
        container_id: int | None = None,
        description: str | None = None,
        notes: str | None = None,
        status: ItemStatus = ItemStatus.IN_STORAGE,
        category: ItemCategory | None = None,
        condition: ItemCondition | None = None,
        isbn: str | None = None,
        quantity: int = 1,
        tags: list[str] | None = None,
        volume: float | None = None,
        expiration_date: date | None = None,
        is_container: bool = False,
    ) -> Item:
        if quantity < 1:
            raise InvalidOperationException(f"create item {name}", "quantity must be at least 1")
        if is_container and container_id is not None:
            raise InvalidOperationException(
                f"create item {name}", "an item that acts as a container cannot be stored inside another container"
            )
        if container_id is not None:
            self._get_container(container_id)

        item = Item(
            name=name.strip(),
            container_id=container_id,
            description=description,
            notes=notes,
            status=status,
            category=category,
            condition=condition,
            isbn=isbn,
            quantity=quantity,
            tags=tags,
            volume=volume,
            expiration_date=expiration_date,
            is_container=is_container,
        )
        self.db.add(item)
        self.db.flush()
        return item

    def get_item(self, item_id: int) -> Item:
        item = self.db.get(Item, item_id)
        if not item:
            raise RecordNotFoundException("Item", item_id)
        return item

    def get_items(
        self,
        status: ItemStatus | None = None,
        category: ItemCategory | None = None,
        container_id: int | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Item]:
        stmt = select(Item).order_by(Item.name, Item.id).limit(limit).offset(offset)
        if status is not None:
            stmt = stmt.where(Item.status == status)
        if category is not None:
            stmt = stmt.where(Item.category == category)
        if container_id is not None:
            stmt = stmt.where(Item.container_id == container_id)
        return list(self.db.execute(stmt).scalars().all())

    def update_item_details(
        self,
        item_id: int,
        name: str | None = None,
        description: str | None = None,
        notes: str | None = None,
        category: ItemCategory | None = None,
        condition: ItemCondition | None = None,
        isbn: str | None = None,
        quantity: int | None = None,
        tags: list[str] | None = None,
        volume: float | None = None,
        expiration_date: date | None = None,
        is_container: bool | None = None,
    ) -> Item:
        """Update descriptive fields. Location and status change through movements only."""
        item = self.get_item(item_id)

        if name is not None:
            item.name = name.strip()
        if description is not None:
            item.description = description
        if notes is not None:
            item.notes = notes
        if category is not None:
            item.category = category
        if condition is not None:
            item.condition = condition
        if isbn is not None:
            item.isbn = isbn
        if quantity is not None:
            if quantity < 1:
                raise InvalidOperationException(f"update item {item.name}", "quantity must be at least 1")
            item.quantity = quantity
        if tags is not None:
            item.tags = tags
        if volume is not None:
            item.volume = volume
        if expiration_date is not None:
            item.expiration_date = expiration_date
        if is_container is not None and is_container != item.is_container:
            if is_container and item.container_id is not None:
                raise InvalidOperationException(
                    f"mark item {item.name} as a container", "it is stored inside a container"
                )
            if not is_container and item.current_slot_id is not None:
                raise InvalidOperationException(
                    f"unmark item {item.name} as a container", "it still occupies a rack slot"
                )
            item.is_container = is_container

        self.db.flush()
        return item

    def delete_item(self, item_id: int, confirm: bool = False) -> None:
        """Permanently delete an item with no movement history."""
        item = self.get_item(item_id)
        if not confirm:
            raise ConfirmationRequiredException(f"permanently delete item {item.name}")

        movement_count = self.db.execute(
            select(func.count(Movement.id)).where(Movement.item_id == item.id)
        ).scalar() or 0
        if movement_count:
            raise DependencyException(
                "item", item.name, f"it has {movement_count} recorded movement(s); remove it instead"
            )

        if item.current_slot_id is not None:
            self.placement_service.unassign_item(item.id)

        self.db.delete(item)
        self.db.flush()
        logger.info(f"Permanently deleted item {item_id}")

    # Photos

    def add_photo(self, item_id: int, url: str, caption: str | None = None) -> ItemPhoto:
        item = self.get_item(item_id)
        if not url.lower().startswith(("http://", "https://")) or not validators.url(url):
            raise InvalidOperationException(
                f"add photo to item {item.name}", "the photo URL must be an http(s) address"
            )

        photo = ItemPhoto(item_id=item.id, url=url, caption=caption)
        self.db.add(photo)
        self.db.flush()
        return photo

    def delete_photo(self, item_id: int, photo_id: int) -> None:
        photo = self.db.get(ItemPhoto, photo_id)
        if not photo or photo.item_id != item_id:
            raise RecordNotFoundException("Photo", photo_id)
        self.db.delete(photo)
        self.db.flush()

    # Movements

    def check_out(self, item_id: int, actor_id: int | None = None, notes: str | None = None) -> Movement:
        """Mark a stored item as taken out; it keeps its home container."""
        item = self.get_item(item_id)
        if item.status in (ItemStatus.CHECKED_OUT, ItemStatus.DISCARDED):
            raise InvalidOperationException(
                f"check out item {item.name}", f"it is {item.status.value.lower().replace('_', ' ')}"
            )

        item.status = ItemStatus.CHECKED_OUT
        return self._record_movement(
            item, MovementAction.CHECK_OUT, item.container_id, None, actor_id, notes
        )

    def check_in(
        self,
        item_id: int,
        container_id: int | None = None,
        actor_id: int | None = None,
        notes: str | None = None,
    ) -> Movement:
        """Return a checked-out item, optionally into a different container."""
        item = self.get_item(item_id)
        if item.status != ItemStatus.CHECKED_OUT:
            raise InvalidOperationException(f"check in item {item.name}", "it is not checked out")

        from_container_id = item.container_id
        if container_id is not None:
            item.container_id = self._get_storable_container(item, container_id).id

        item.status = ItemStatus.IN_STORAGE
        return self._record_movement(
            item, MovementAction.CHECK_IN, from_container_id, item.container_id, actor_id, notes
        )

    def move(
        self,
        item_id: int,
        to_container_id: int,
        actor_id: int | None = None,
        notes: str | None = None,
    ) -> Movement:
        item = self.get_item(item_id)
        if item.status == ItemStatus.DISCARDED:
            raise InvalidOperationException(f"move item {item.name}", "it has been removed")
        if item.container_id == to_container_id:
            raise InvalidOperationException(f"move item {item.name}", "it is already in that container")

        target = self._get_storable_container(item, to_container_id)
        from_container_id = item.container_id
        item.container_id = target.id
        return self._record_movement(
            item, MovementAction.MOVE, from_container_id, target.id, actor_id, notes
        )

    def remove(self, item_id: int, actor_id: int | None = None, notes: str | None = None) -> Movement:
        """Take an item out of the inventory while keeping its history."""
        item = self.get_item(item_id)
        if item.status == ItemStatus.DISCARDED:
            raise InvalidOperationException(f"remove item {item.name}", "it was already removed")

        if item.current_slot_id is not None:
            self.placement_service.unassign_item(item.id)

        from_container_id = item.container_id
        item.container_id = None
        item.status = ItemStatus.DISCARDED
        return self._record_movement(
            item, MovementAction.REMOVE, from_container_id, None, actor_id, notes
        )

    def list_movements(self, item_id: int) -> list[Movement]:
        item = self.get_item(item_id)
        stmt = (
            select(Movement)
            .where(Movement.item_id == item.id)
            .order_by(Movement.timestamp, Movement.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def _record_movement(
        self,
        item: Item,
        action: MovementAction,
        from_container_id: int | None,
        to_container_id: int | None,
        actor_id: int | None,
        notes: str | None,
    ) -> Movement:
        if actor_id is not None and self.db.get(User, actor_id) is None:
            raise RecordNotFoundException("User", actor_id)

        movement = Movement(
            item_id=item.id,
            action=action,
            from_container_id=from_container_id,
            to_container_id=to_container_id,
            actor_id=actor_id,
            notes=notes,
        )
        self.db.add(movement)
        self.db.flush()

        self.metrics_service.record_movement(action.value)
        logger.info(
            f"Item {item.id} {action.value}: container {from_container_id} -> {to_container_id}"
        )
        return movement

    def _get_container(self, container_id: int) -> Container:
        container = self.db.get(Container, container_id)
        if not container:
            raise RecordNotFoundException("Container", container_id)
        return container

    def _get_storable_container(self, item: Item, container_id: int) -> Container:
        if item.is_container:
            raise InvalidOperationException(
                f"store item {item.name} in a container", "it acts as a container itself"
            )
        return self._get_container(container_id)
