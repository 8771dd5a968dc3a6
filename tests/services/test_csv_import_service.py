"""Tests for the intake-form CSV import."""

from datetime import date

import pytest
from flask import Flask
from sqlalchemy import event
from sqlalchemy.orm import Session

from tote_inventory.models.container import Container
from tote_inventory.models.item import Item, ItemCategory, ItemCondition, ItemStatus
from tote_inventory.models.location import Location
from tote_inventory.services.csv_import_service import (
    map_category,
    map_condition,
    map_status,
    parse_date,
    parse_quantity,
)

HEADER = (
    "Timestamp,Tote Number,Tote Description,Tote Location,Item Name,Category,"
    "Condition or Status,ISBN,Notes,Item Photo,QTY,Expiration Date if One"
)

ROWS = [
    '2024-01-05 10:00:00,Bin #1,Holiday decor,Garage,String lights,Lights,Unopened,,,'
    'https://example.com/lights.jpg,2,',
    "2024-01-05 10:05:00,Bin #1,Holiday decor,Garage,Lantern,Camping gear,Used,,Needs batteries,,~3,",
    "2024-01-05 10:06:00,Bin #1,Holiday decor,Garage,,Misc,,,,,,",
    "2024-01-05 10:07:00,###,,,Mystery,Misc,,,,,,",
    "2024-01-06 09:00:00,Book Box #1,,Basement,Old novel,Books,Discard,978-0,,,1,",
    "2024-01-06 09:05:00,Book Box #1,,Basement,First aid kit,First Aid,Opened - nothing missing,,,,,03/2027",
]


def _csv_lines() -> list[str]:
    return [HEADER, *ROWS]


@pytest.fixture
def csv_import_service(container):
    return container.csv_import_service()


@pytest.fixture
def plastic_bin_type(app: Flask, session: Session, container_type_service):
    with app.app_context():
        container_type = container_type_service.create_type("Plastic Bin", "BIN")
        session.flush()
        return container_type


class TestValueMapping:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Books", ItemCategory.BOOKS),
            ("games & hobbies", ItemCategory.GAMES_HOBBIES),
            ("Camping gear", ItemCategory.CAMPING_OUTDOORS),
            ("Outdoor stuff", ItemCategory.CAMPING_OUTDOORS),
            ("Power Tools", ItemCategory.TOOLS_GEAR),
            ("Emergency kit", ItemCategory.EMERGENCY),
            ("Tech", ItemCategory.TECH_MEDIA),
            ("Knick knacks", ItemCategory.MISC),
            ("", None),
        ],
    )
    def test_map_category(self, value, expected):
        assert map_category(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Unopened", ItemCondition.UNOPENED),
            ("Opened - nothing missing", ItemCondition.OPENED_COMPLETE),
            ("Opened - missing pieces", ItemCondition.OPENED_MISSING),
            ("Used", ItemCondition.USED),
            ("In a binder", ItemCondition.USED),
            ("Damaged box", ItemCondition.DAMAGED),
            ("Discard", None),
            (None, None),
        ],
    )
    def test_map_condition(self, value, expected):
        assert map_condition(value) == expected

    def test_map_status(self):
        assert map_status("Discard - broken") == ItemStatus.DISCARDED
        assert map_status("Checked out to Sam") == ItemStatus.CHECKED_OUT
        assert map_status("Used") == ItemStatus.IN_STORAGE
        assert map_status(None) == ItemStatus.IN_STORAGE

    @pytest.mark.parametrize("value,expected", [("3", 3), ("~10", 10), ("", 1), ("0", 1), (None, 1)])
    def test_parse_quantity(self, value, expected):
        assert parse_quantity(value) == expected

    def test_parse_date(self):
        assert parse_date("2027-03-01") == date(2027, 3, 1)
        assert parse_date("03/2027") == date(2027, 3, 1)
        assert parse_date("someday") is None
        assert parse_date("") is None


class TestCsvImport:
    """Test cases for importing whole files."""

    def test_import_counts(self, app: Flask, session: Session, plastic_bin_type, csv_import_service):
        with app.app_context():
            result = csv_import_service.import_csv(_csv_lines())

            assert result.rows_total == 6
            assert result.items_created == 4
            assert result.skipped == 1
            assert result.failed == 1
            assert result.duplicates == 0
            assert result.containers_created == 2
            assert result.locations_created == 2
            assert result.photos_created == 1
            assert [(e.row_number, e.message) for e in result.errors] == [
                (4, "missing tote number or item name"),
                (5, "Cannot create container '###' because no code could be derived from the label"),
            ]

    def test_imported_containers(
        self, app: Flask, session: Session, plastic_bin_type, csv_import_service, container_service
    ):
        with app.app_context():
            csv_import_service.import_csv(_csv_lines())

            bin_container = container_service.get_container_by_code("BIN-01")
            assert bin_container.container_type_id == plastic_bin_type.id
            assert bin_container.legacy_type is None
            assert bin_container.description == "Holiday decor"
            assert bin_container.tags == ["loc:Garage", "source:csv"]

            book_box = container_service.get_container_by_code("BOOKBOX-01")
            assert book_box.container_type_id is None
            assert book_box.legacy_type == "Book Box"

            assert sorted(loc.name for loc in session.query(Location).all()) == ["Basement", "Garage"]

    def test_imported_items(self, app: Flask, session: Session, plastic_bin_type, csv_import_service):
        with app.app_context():
            csv_import_service.import_csv(_csv_lines())

            items = {item.name: item for item in session.query(Item).all()}
            assert set(items) == {"String lights", "Lantern", "Old novel", "First aid kit"}

            lights = items["String lights"]
            assert lights.quantity == 2
            assert lights.category == ItemCategory.LIGHTS
            assert lights.condition == ItemCondition.UNOPENED
            assert [p.url for p in lights.photos] == ["https://example.com/lights.jpg"]
            assert lights.tags == ["source:csv"]

            assert items["Lantern"].quantity == 3
            assert items["Lantern"].notes == "Needs batteries"
            assert items["Old novel"].status == ItemStatus.DISCARDED
            assert items["Old novel"].isbn == "978-0"
            assert items["First aid kit"].expiration_date == date(2027, 3, 1)

    def test_reimport_creates_nothing(self, app: Flask, session: Session, plastic_bin_type, csv_import_service):
        with app.app_context():
            csv_import_service.import_csv(_csv_lines())

            result = csv_import_service.import_csv(_csv_lines())

            assert result.items_created == 0
            assert result.duplicates == 4
            assert result.containers_created == 0
            assert result.locations_created == 0
            assert session.query(Item).count() == 4

    def test_header_only(self, app: Flask, session: Session, csv_import_service):
        with app.app_context():
            result = csv_import_service.import_csv([HEADER])

            assert result.rows_total == 0
            assert result.errors == []

    def test_blank_location_defaults_to_unassigned(
        self, app: Flask, session: Session, plastic_bin_type, csv_import_service, container_service
    ):
        lines = [HEADER, "2024-02-01 08:00:00,Tote #3,,,Rope,Cordage,,,,,1,"]

        with app.app_context():
            result = csv_import_service.import_csv(lines)

            assert result.items_created == 1
            assert result.locations_created == 1
            tote = container_service.get_container_by_code("TOTE-03")
            assert tote.tags == ["loc:Unassigned", "source:csv"]
            assert [loc.name for loc in session.query(Location).all()] == ["Unassigned"]

    def test_failed_row_reports_nothing_it_rolled_back(
        self, app: Flask, session: Session, plastic_bin_type, csv_import_service
    ):
        # Mimics a column length limit the database would enforce on insert
        def reject_long_isbn(flush_session, flush_context, instances):
            for obj in flush_session.new:
                if isinstance(obj, Item) and obj.isbn and len(obj.isbn) > 32:
                    raise ValueError("isbn too long")

        lines = [HEADER, f"2024-02-01 08:00:00,Crate #7,,Attic,Atlas,Books,,{'9' * 40},,,1,"]

        with app.app_context():
            event.listen(session, "before_flush", reject_long_isbn)
            try:
                result = csv_import_service.import_csv(lines)
            finally:
                event.remove(session, "before_flush", reject_long_isbn)

            assert result.failed == 1
            assert result.items_created == 0
            assert result.containers_created == 0
            assert result.locations_created == 0
            assert [(e.row_number, e.message) for e in result.errors] == [(2, "isbn too long")]
            assert session.query(Container).count() == 0
            assert session.query(Location).count() == 0
