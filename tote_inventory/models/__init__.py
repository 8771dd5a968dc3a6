"""SQLAlchemy models for the tote inventory."""

# Import all models here for Alembic auto-generation
from tote_inventory.models.container import Container, ContainerStatus
from tote_inventory.models.container_type import ContainerType
from tote_inventory.models.item import Item, ItemCategory, ItemCondition, ItemStatus
from tote_inventory.models.item_photo import ItemPhoto
from tote_inventory.models.location import Location
from tote_inventory.models.movement import Movement, MovementAction
from tote_inventory.models.rack import Rack
from tote_inventory.models.slot import Slot
from tote_inventory.models.user import PendingUser, PendingUserStatus, User, UserRole

__all__: list[str] = [
    "Container",
    "ContainerStatus",
    "ContainerType",
    "Item",
    "ItemCategory",
    "ItemCondition",
    "ItemPhoto",
    "ItemStatus",
    "Location",
    "Movement",
    "MovementAction",
    "PendingUser",
    "PendingUserStatus",
    "Rack",
    "Slot",
    "User",
    "UserRole",
]
