"""Bulk import of intake-form CSV exports into containers and items."""

import csv
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tote_inventory.exceptions import BusinessLogicException
from tote_inventory.models.container import Container
from tote_inventory.models.item import Item, ItemCategory, ItemCondition, ItemStatus
from tote_inventory.models.item_photo import ItemPhoto
from tote_inventory.services.base import BaseService
from tote_inventory.services.container_service import ContainerService
from tote_inventory.services.container_type_service import ContainerTypeService
from tote_inventory.services.location_service import LocationService
from tote_inventory.services.metrics_service import MetricsServiceProtocol
from tote_inventory.utils.container_codes import code_prefix, parse_container_name

logger = logging.getLogger(__name__)

CSV_COLUMNS = (
    "Timestamp",
    "Tote Number",
    "Tote Description",
    "Tote Location",
    "Item Name",
    "Category",
    "Condition or Status",
    "ISBN",
    "Notes",
    "Item Photo",
    "QTY",
    "Expiration Date if One",
)

SOURCE_TAG = "source:csv"
DEFAULT_LOCATION = "Unassigned"
DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%m/%d/%y", "%m/%Y", "%Y")

_EXACT_CATEGORIES = {
    "books": ItemCategory.BOOKS,
    "games & hobbies": ItemCategory.GAMES_HOBBIES,
    "cooking": ItemCategory.COOKING,
    "cleaning": ItemCategory.CLEANING,
    "electronics": ItemCategory.ELECTRONICS,
    "lights": ItemCategory.LIGHTS,
    "first aid": ItemCategory.FIRST_AID,
    "clothes": ItemCategory.CLOTHES,
    "cordage": ItemCategory.CORDAGE,
    "misc": ItemCategory.MISC,
}


def map_category(value: str | None) -> ItemCategory | None:
    """Map a free-text category onto an ``ItemCategory``; unknown text becomes MISC."""
    if not value or not value.strip():
        return None

    normalized = value.strip().lower()
    if normalized in _EXACT_CATEGORIES:
        return _EXACT_CATEGORIES[normalized]
    if "camping" in normalized or "outdoor" in normalized:
        return ItemCategory.CAMPING_OUTDOORS
    if "tools" in normalized or normalized == "tool":
        return ItemCategory.TOOLS_GEAR
    if "emergency" in normalized:
        return ItemCategory.EMERGENCY
    if "tech" in normalized or "media" in normalized:
        return ItemCategory.TECH_MEDIA
    return ItemCategory.MISC


def map_condition(value: str | None) -> ItemCondition | None:
    """Map free-text condition; text that matches nothing gives None."""
    if not value or not value.strip():
        return None

    normalized = value.strip().lower()
    if normalized == "unopened":
        return ItemCondition.UNOPENED
    if "opened - nothing missing" in normalized or "opened complete" in normalized:
        return ItemCondition.OPENED_COMPLETE
    if "opened - missing" in normalized or "opened but missing" in normalized:
        return ItemCondition.OPENED_MISSING
    if "used" in normalized or "binder" in normalized or "loose leaf" in normalized:
        return ItemCondition.USED
    if "damaged" in normalized:
        return ItemCondition.DAMAGED
    return None


def map_status(value: str | None) -> ItemStatus:
    normalized = (value or "").strip().lower()
    if "discard" in normalized:
        return ItemStatus.DISCARDED
    if "checked out" in normalized:
        return ItemStatus.CHECKED_OUT
    return ItemStatus.IN_STORAGE


def parse_quantity(value: str | None) -> int:
    """Digits only ("~10" is 10); empty or zero quantities count as 1."""
    digits = "".join(ch for ch in (value or "") if ch.isdigit())
    if not digits:
        return 1
    return max(int(digits), 1)


def parse_date(value: str | None) -> date | None:
    text = (value or "").strip()
    if not text:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


@dataclass
class ImportRowError:
    row_number: int
    message: str


@dataclass
class RowOutcome:
    status: str = "created"
    containers_created: int = 0
    locations_created: int = 0
    photos_created: int = 0


@dataclass
class ImportResult:
    rows_total: int = 0
    items_created: int = 0
    duplicates: int = 0
    skipped: int = 0
    failed: int = 0
    containers_created: int = 0
    locations_created: int = 0
    photos_created: int = 0
    errors: list[ImportRowError] = field(default_factory=list)


class CsvImportService(BaseService):
    """Imports intake-form rows, one savepoint per row.

    A failing row is rolled back on its own and reported; the rest of the
    batch continues. Rows already imported are recognised by container code,
    item name and form timestamp, so re-running an import creates nothing new.
    """

    def __init__(
        self,
        db: Session,
        container_service: ContainerService,
        container_type_service: ContainerTypeService,
        location_service: LocationService,
        metrics_service: MetricsServiceProtocol,
    ):
        super().__init__(db)
        self.container_service = container_service
        self.container_type_service = container_type_service
        self.location_service = location_service
        self.metrics_service = metrics_service

    def import_csv(self, lines: Iterable[str]) -> ImportResult:
        """Import rows from CSV text lines (a file object or ``str.splitlines()``)."""
        result = ImportResult()
        reader = csv.DictReader(lines)

        # Row 1 is the header
        for row_number, raw_row in enumerate(reader, start=2):
            result.rows_total += 1
            row = {
                (key or "").strip(): (value or "").strip()
                for key, value in raw_row.items()
                if not isinstance(value, list)
            }

            if not row.get("Tote Number") or not row.get("Item Name"):
                result.skipped += 1
                result.errors.append(ImportRowError(row_number, "missing tote number or item name"))
                self.metrics_service.record_import_row("skipped")
                continue

            try:
                with self.db.begin_nested():
                    outcome = self._import_row(row)
            except (BusinessLogicException, SQLAlchemyError, ValueError) as e:
                result.failed += 1
                message = e.message if isinstance(e, BusinessLogicException) else str(e)
                result.errors.append(ImportRowError(row_number, message))
                self.metrics_service.record_import_row("failed")
                logger.warning(f"CSV row {row_number} failed: {message}")
                continue

            # Counted only once the savepoint has been released
            result.containers_created += outcome.containers_created
            result.locations_created += outcome.locations_created
            result.photos_created += outcome.photos_created
            if outcome.status == "duplicate":
                result.duplicates += 1
            else:
                result.items_created += 1
            self.metrics_service.record_import_row(outcome.status)

        logger.info(
            f"CSV import finished: {result.rows_total} rows, {result.items_created} items created, "
            f"{result.duplicates} duplicates, {result.skipped} skipped, {result.failed} failed"
        )
        return result

    def _import_row(self, row: dict[str, str]) -> RowOutcome:
        outcome = RowOutcome()
        parsed = parse_container_name(row["Tote Number"])
        location_name = row.get("Tote Location") or DEFAULT_LOCATION

        container = self.container_service.find_by_code(parsed.code)
        if container is None:
            container = self._create_container(parsed.label, parsed.code, parsed.type, row.get("Tote Description"))
            outcome.containers_created += 1

        _, location_created = self.location_service.get_or_create_location(location_name)
        if location_created:
            outcome.locations_created += 1
        self._add_tags(container, [f"loc:{location_name}", SOURCE_TAG])

        import_key = f"{container.code}|{row['Item Name']}|{row.get('Timestamp', '')}"
        existing = self.db.execute(
            select(Item.id).where(Item.import_key == import_key)
        ).scalar_one_or_none()
        if existing is not None:
            outcome.status = "duplicate"
            return outcome

        condition_text = row.get("Condition or Status")
        item = Item(
            name=row["Item Name"],
            notes=row.get("Notes") or None,
            category=map_category(row.get("Category")),
            condition=map_condition(condition_text),
            status=map_status(condition_text),
            isbn=row.get("ISBN") or None,
            quantity=parse_quantity(row.get("QTY")),
            expiration_date=parse_date(row.get("Expiration Date if One")),
            container_id=container.id,
            tags=[SOURCE_TAG],
            import_key=import_key,
        )
        self.db.add(item)
        self.db.flush()

        photo_url = row.get("Item Photo", "")
        if photo_url.lower().startswith(("http://", "https://")):
            self.db.add(ItemPhoto(item_id=item.id, url=photo_url))
            self.db.flush()
            outcome.photos_created += 1

        return outcome

    def _create_container(
        self, label: str, code: str, type_name: str, description: str | None
    ) -> Container:
        container_type = (
            self.container_type_service.find_by_name(type_name)
            or self.container_type_service.find_by_prefix(code_prefix(code))
        )
        return self.container_service.create_container(
            label=label,
            code=code,
            description=description or None,
            container_type_id=container_type.id if container_type else None,
            legacy_type=None if container_type else type_name,
        )

    @staticmethod
    def _add_tags(container: Container, tags: list[str]) -> None:
        current = list(container.tags or [])
        missing = [tag for tag in tags if tag not in current]
        if missing:
            container.tags = current + missing
