"""Container service for totes, bins and boxes."""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, selectinload

from tote_inventory.exceptions import (
    DependencyException,
    InvalidOperationException,
    RecordNotFoundException,
    ResourceConflictException,
)
from tote_inventory.models.container import Container, ContainerStatus
from tote_inventory.models.item import Item
from tote_inventory.models.movement import Movement
from tote_inventory.services.base import BaseService
from tote_inventory.services.container_type_service import ContainerTypeService
from tote_inventory.services.placement_service import PlacementService
from tote_inventory.utils.container_codes import normalize_code, parse_container_name
from tote_inventory.utils.volume import ContainerCapacity, calculate_container_capacity

logger = logging.getLogger(__name__)

PLACEMENT_FILTERS = ("racked", "nested", "unplaced")


class ContainerService(BaseService):
    """Service class for container management operations."""

    def __init__(
        self,
        db: Session,
        placement_service: PlacementService,
        container_type_service: ContainerTypeService,
    ):
        super().__init__(db)
        self.placement_service = placement_service
        self.container_type_service = container_type_service

    def create_container(
        self,
        label: str,
        code: str | None = None,
        description: str | None = None,
        status: ContainerStatus = ContainerStatus.ACTIVE,
        tags: list[str] | None = None,
        container_type_id: int | None = None,
        legacy_type: str | None = None,
    ) -> Container:
        """Create a container; without an explicit code one is derived from the label."""
        label = label.strip()
        code = normalize_code(code) if code else parse_container_name(label).code
        if not code:
            raise InvalidOperationException(
                f"create container {label!r}", "no code could be derived from the label"
            )

        if self.find_by_code(code) is not None:
            raise ResourceConflictException("Container", f"code {code}")

        if container_type_id is not None:
            self.container_type_service.get_type(container_type_id)

        container = Container(
            code=code,
            label=label,
            description=description,
            status=status,
            tags=tags,
            container_type_id=container_type_id,
            legacy_type=legacy_type,
        )
        self.db.add(container)
        self.db.flush()
        logger.info(f"Created container {container.code}")
        return container

    def get_container(self, container_id: int) -> Container:
        container = self.db.get(Container, container_id)
        if not container:
            raise RecordNotFoundException("Container", container_id)
        return container

    def get_container_by_code(self, code: str) -> Container:
        """Exact code lookup used by QR deep links."""
        container = self.find_by_code(code)
        if container is None:
            raise RecordNotFoundException("Container", code)
        return container

    def find_by_code(self, code: str) -> Container | None:
        stmt = select(Container).where(Container.code == code)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_containers(
        self,
        status: ContainerStatus | None = None,
        container_type_id: int | None = None,
        placement: str | None = None,
    ) -> list[Container]:
        """List containers ordered by code, optionally filtered."""
        stmt = select(Container).options(selectinload(Container.container_type)).order_by(Container.code)

        if status is not None:
            stmt = stmt.where(Container.status == status)
        if container_type_id is not None:
            stmt = stmt.where(Container.container_type_id == container_type_id)
        if placement is not None:
            if placement not in PLACEMENT_FILTERS:
                raise InvalidOperationException(
                    f"filter containers by placement {placement!r}",
                    f"placement must be one of {', '.join(PLACEMENT_FILTERS)}",
                )
            if placement == "racked":
                stmt = stmt.where(Container.current_slot_id.is_not(None))
            elif placement == "nested":
                stmt = stmt.where(Container.parent_container_id.is_not(None))
            else:
                stmt = stmt.where(
                    Container.current_slot_id.is_(None),
                    Container.parent_container_id.is_(None),
                )

        return list(self.db.execute(stmt).scalars().all())

    def update_container(
        self,
        container_id: int,
        label: str | None = None,
        description: str | None = None,
        status: ContainerStatus | None = None,
        tags: list[str] | None = None,
        container_type_id: int | None = None,
    ) -> Container:
        """Update container details. The code never changes once assigned."""
        container = self.get_container(container_id)

        if label is not None:
            container.label = label.strip()
        if description is not None:
            container.description = description
        if status is not None:
            container.status = status
        if tags is not None:
            container.tags = tags
        if container_type_id is not None:
            container.container_type_id = self.container_type_service.get_type(container_type_id).id
            container.legacy_type = None

        self.db.flush()
        return container

    def delete_container(self, container_id: int) -> None:
        """Delete an empty container with no movement history, freeing its slot."""
        container = self.get_container(container_id)

        item_count = self.db.execute(
            select(func.count(Item.id)).where(Item.container_id == container.id)
        ).scalar() or 0
        if item_count:
            raise DependencyException(
                "container", container.code, f"it still holds {item_count} item(s)"
            )

        child_count = self.db.execute(
            select(func.count(Container.id)).where(Container.parent_container_id == container.id)
        ).scalar() or 0
        if child_count:
            raise DependencyException(
                "container", container.code, f"{child_count} container(s) are nested inside it"
            )

        movement_count = self.db.execute(
            select(func.count(Movement.id)).where(
                or_(
                    Movement.from_container_id == container.id,
                    Movement.to_container_id == container.id,
                )
            )
        ).scalar() or 0
        if movement_count:
            raise DependencyException(
                "container", container.code, f"{movement_count} item movement(s) reference it"
            )

        self.placement_service.release_container(container)
        self.db.delete(container)
        self.db.flush()
        logger.info(f"Deleted container {container.code}")

    def get_capacity(self, container_id: int) -> ContainerCapacity:
        """Fill summary for the items currently stored in the container."""
        container = self.get_container(container_id)
        volumes = self.db.execute(
            select(Item.volume).where(Item.container_id == container.id)
        ).scalars().all()
        return calculate_container_capacity(container.capacity, volumes)
