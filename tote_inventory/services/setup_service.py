"""Setup service for seeding the built-in container type catalog."""

import logging
from dataclasses import dataclass

from tote_inventory.services.base import BaseService
from tote_inventory.services.container_type_service import DIMENSION_FIELDS, ContainerTypeService
from tote_inventory.utils.file_parsers import get_container_types_from_setup

logger = logging.getLogger(__name__)


@dataclass
class SeedResult:
    created: int
    updated: int


class SetupService(BaseService):
    """Service class for database setup and initialization operations."""

    def __init__(self, db, container_type_service: ContainerTypeService):
        super().__init__(db)
        self.container_type_service = container_type_service

    def sync_container_types_from_setup(self) -> SeedResult:
        """Upsert the catalog from data/setup/container_types.json by type name.

        Existing types get their prefix, icon, description and dimensions
        refreshed; this is idempotent and safe to run repeatedly.

        Raises:
            InvalidOperationException: If the setup file is missing or malformed
        """
        created = 0
        updated = 0

        for entry in get_container_types_from_setup():
            dimensions = {key: entry.get(key) for key in DIMENSION_FIELDS}
            existing = self.container_type_service.find_by_name(entry["name"])

            if existing is None:
                self.container_type_service.create_type(
                    name=entry["name"],
                    code_prefix=entry["code_prefix"],
                    icon_key=entry.get("icon_key"),
                    description=entry.get("description"),
                    **dimensions,
                )
                created += 1
            else:
                self.container_type_service.update_type(
                    existing.id,
                    code_prefix=entry["code_prefix"],
                    icon_key=entry.get("icon_key"),
                    description=entry.get("description"),
                    **dimensions,
                )
                updated += 1

        logger.info(f"Container type seed complete: {created} created, {updated} updated")
        return SeedResult(created=created, updated=updated)
