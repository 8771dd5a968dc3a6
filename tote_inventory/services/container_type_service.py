"""Container type service for the standard container catalog."""

import logging

from sqlalchemy import func, select

from tote_inventory.exceptions import (
    ConfirmationRequiredException,
    DependencyException,
    RecordNotFoundException,
    ResourceConflictException,
)
from tote_inventory.models.container import Container
from tote_inventory.models.container_type import ContainerType
from tote_inventory.services.base import BaseService
from tote_inventory.utils.volume import derive_capacity

logger = logging.getLogger(__name__)

DIMENSION_FIELDS = (
    "length",
    "width",
    "height",
    "top_length",
    "top_width",
    "bottom_length",
    "bottom_width",
)


class ContainerTypeService(BaseService):
    """Service class for container type management operations."""

    def create_type(
        self,
        name: str,
        code_prefix: str,
        icon_key: str | None = None,
        description: str | None = None,
        **dimensions: float | None,
    ) -> ContainerType:
        """Create a type; capacity is derived from whichever dimension set is complete."""
        name = name.strip()
        if self.find_by_name(name) is not None:
            raise ResourceConflictException("Container type", f"name {name}")

        container_type = ContainerType(
            name=name,
            code_prefix=code_prefix.strip().upper(),
            icon_key=icon_key,
            description=description,
        )
        self._apply_dimensions(container_type, dimensions)
        self.db.add(container_type)
        self.db.flush()
        return container_type

    def get_type(self, type_id: int) -> ContainerType:
        container_type = self.db.get(ContainerType, type_id)
        if not container_type:
            raise RecordNotFoundException("Container type", type_id)
        return container_type

    def get_all_types(self) -> list[ContainerType]:
        stmt = select(ContainerType).order_by(ContainerType.name)
        return list(self.db.execute(stmt).scalars().all())

    def get_all_types_with_usage(self) -> list[tuple[ContainerType, int]]:
        """List types with the number of containers using each."""
        stmt = (
            select(ContainerType, func.count(Container.id).label("container_count"))
            .outerjoin(Container, Container.container_type_id == ContainerType.id)
            .group_by(ContainerType.id)
            .order_by(ContainerType.name)
        )
        return [(container_type, count) for container_type, count in self.db.execute(stmt).all()]

    def update_type(
        self,
        type_id: int,
        name: str | None = None,
        code_prefix: str | None = None,
        icon_key: str | None = None,
        description: str | None = None,
        **dimensions: float | None,
    ) -> ContainerType:
        """Update a type; dimensions passed as None are left unchanged."""
        container_type = self.get_type(type_id)

        if name is not None:
            name = name.strip()
            existing = self.find_by_name(name)
            if existing is not None and existing.id != container_type.id:
                raise ResourceConflictException("Container type", f"name {name}")
            container_type.name = name
        if code_prefix is not None:
            container_type.code_prefix = code_prefix.strip().upper()
        if icon_key is not None:
            container_type.icon_key = icon_key
        if description is not None:
            container_type.description = description

        self._apply_dimensions(
            container_type,
            {key: value for key, value in dimensions.items() if value is not None},
        )
        self.db.flush()
        return container_type

    def delete_type(self, type_id: int, confirm: bool = False) -> None:
        """Delete a type no container uses; destructive, so it must be confirmed."""
        container_type = self.get_type(type_id)
        if not confirm:
            raise ConfirmationRequiredException(f"delete container type {container_type.name}")

        in_use = self.db.execute(
            select(func.count(Container.id)).where(Container.container_type_id == container_type.id)
        ).scalar() or 0
        if in_use:
            raise DependencyException(
                "container type", container_type.name, f"{in_use} container(s) still use it"
            )

        self.db.delete(container_type)
        self.db.flush()
        logger.info(f"Deleted container type {container_type.name}")

    def recalculate_capacities(self) -> int:
        """Re-derive every stored capacity from the dimensions; returns how many changed."""
        updated = 0
        for container_type in self.get_all_types():
            capacity = derive_capacity(container_type)
            if capacity != container_type.capacity:
                container_type.capacity = capacity
                updated += 1
        self.db.flush()
        logger.info(f"Recalculated capacities, {updated} container type(s) changed")
        return updated

    def find_by_name(self, name: str) -> ContainerType | None:
        """Case-insensitive exact name lookup."""
        stmt = select(ContainerType).where(func.lower(ContainerType.name) == name.strip().lower())
        return self.db.execute(stmt).scalars().first()

    def find_by_prefix(self, code_prefix: str) -> ContainerType | None:
        stmt = (
            select(ContainerType)
            .where(func.upper(ContainerType.code_prefix) == code_prefix.strip().upper())
            .order_by(ContainerType.id)
        )
        return self.db.execute(stmt).scalars().first()

    @staticmethod
    def _apply_dimensions(container_type: ContainerType, dimensions: dict[str, float | None]) -> None:
        for field, value in dimensions.items():
            if field not in DIMENSION_FIELDS:
                raise TypeError(f"unknown dimension {field}")
            setattr(container_type, field, value)
        container_type.capacity = derive_capacity(container_type)
