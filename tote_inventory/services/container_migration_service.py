"""Backfill of container types for containers that only carry a free-text type."""

import logging
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from tote_inventory.models.container import Container
from tote_inventory.models.container_type import ContainerType
from tote_inventory.services.base import BaseService
from tote_inventory.utils.container_codes import code_prefix
from tote_inventory.utils.file_parsers import get_container_types_from_setup

logger = logging.getLogger(__name__)


@dataclass
class MigrationDetail:
    container_id: int
    container_code: str
    legacy_type: str
    matched_type_name: str | None = None
    matched_type_id: int | None = None
    error: str | None = None


@dataclass
class MigrationResult:
    dry_run: bool
    total_containers: int = 0
    matched: int = 0
    unmatched: int = 0
    failed: int = 0
    details: list[MigrationDetail] = field(default_factory=list)


class ContainerMigrationService(BaseService):
    """Matches untyped containers to container types.

    Matching tries, in order: the legacy type against type names, the code
    prefix before the first dash against type prefixes, and finally the
    legacy type against the built-in catalog's names and prefixes.

    When applying, each container is written in its own savepoint; a failure
    is recorded on that container's detail and the run continues.
    """

    def migrate_container_types(self, dry_run: bool = True) -> MigrationResult:
        containers = self.db.execute(
            select(Container).where(Container.container_type_id.is_(None)).order_by(Container.code)
        ).scalars().all()
        types = self.db.execute(select(ContainerType).order_by(ContainerType.id)).scalars().all()

        types_by_name: dict[str, ContainerType] = {}
        types_by_prefix: dict[str, ContainerType] = {}
        for container_type in types:
            types_by_name.setdefault(container_type.name.lower(), container_type)
            types_by_prefix.setdefault(container_type.code_prefix.lower(), container_type)

        catalog_names: dict[str, str] = {}
        for entry in get_container_types_from_setup():
            catalog_names.setdefault(entry["name"].lower(), entry["name"])
            catalog_names.setdefault(entry["code_prefix"].lower(), entry["name"])

        result = MigrationResult(dry_run=dry_run, total_containers=len(containers))

        for container in containers:
            legacy_type = (container.legacy_type or "").strip()
            matched = types_by_name.get(legacy_type.lower()) if legacy_type else None

            if matched is None:
                matched = types_by_prefix.get(code_prefix(container.code).lower())

            if matched is None and legacy_type:
                catalog_name = catalog_names.get(legacy_type.lower())
                if catalog_name is not None:
                    matched = types_by_name.get(catalog_name.lower())

            detail = MigrationDetail(
                container_id=container.id,
                container_code=container.code,
                legacy_type=legacy_type,
            )
            result.details.append(detail)
            if matched is None:
                result.unmatched += 1
                continue

            detail.matched_type_name = matched.name
            detail.matched_type_id = matched.id
            if not dry_run:
                try:
                    with self.db.begin_nested():
                        container.container_type_id = matched.id
                        container.legacy_type = None
                        self.db.flush()
                except (SQLAlchemyError, ValueError) as e:
                    result.failed += 1
                    detail.error = str(e)
                    logger.warning(f"Failed to assign type to container {detail.container_code}: {e}")
                    continue
            result.matched += 1

        logger.info(
            f"Container type migration ({'dry run' if dry_run else 'applied'}): "
            f"{result.matched} matched, {result.unmatched} unmatched, {result.failed} failed "
            f"of {result.total_containers}"
        )
        return result
