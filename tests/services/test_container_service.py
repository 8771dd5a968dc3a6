"""Tests for container service functionality."""

import pytest
from flask import Flask
from sqlalchemy.orm import Session

from tote_inventory.exceptions import (
    DependencyException,
    InvalidOperationException,
    RecordNotFoundException,
    ResourceConflictException,
)
from tote_inventory.models.container import Container, ContainerStatus
from tote_inventory.models.slot import Slot


class TestCreateContainer:
    """Test cases for creating containers."""

    def test_code_derived_from_label(self, app: Flask, session: Session, container_service):
        with app.app_context():
            container = container_service.create_container("Book Box #1")

            assert container.id is not None
            assert container.code == "BOOKBOX-01"
            assert container.label == "Book Box #1"
            assert container.status == ContainerStatus.ACTIVE

    def test_explicit_code_is_normalized(self, app: Flask, session: Session, container_service):
        with app.app_context():
            container = container_service.create_container("Blue tote", code="blue tote 3")
            assert container.code == "BLUE-TOTE-3"

    def test_duplicate_code_conflicts(self, app: Flask, session: Session, container_service):
        with app.app_context():
            container_service.create_container("Bin #1")

            with pytest.raises(ResourceConflictException) as exc_info:
                container_service.create_container("Bin #01")

            assert "code BIN-01 already exists" in str(exc_info.value)

    def test_label_without_code_characters_rejected(self, app: Flask, session: Session, container_service):
        with app.app_context():
            with pytest.raises(InvalidOperationException):
                container_service.create_container("###")

    def test_unknown_container_type(self, app: Flask, session: Session, container_service):
        with app.app_context():
            with pytest.raises(RecordNotFoundException):
                container_service.create_container("Bin #1", container_type_id=999)


class TestQueryContainers:
    def test_get_by_code(self, app: Flask, session: Session, container_service):
        with app.app_context():
            created = container_service.create_container("Tote #5")

            assert container_service.get_container_by_code("TOTE-05").id == created.id
            with pytest.raises(RecordNotFoundException):
                container_service.get_container_by_code("tote-05")

    def test_filter_by_placement(
        self, app: Flask, session: Session, rack_setup, container_service, placement_service
    ):
        with app.app_context():
            racked = container_service.create_container("Bin #1")
            parent = container_service.create_container("Tote #1")
            nested = container_service.create_container("Box #1")
            slot = session.query(Slot).filter_by(rack_id=rack_setup.id, row=0, col=0).one()
            placement_service.assign_container_to_slot(racked.id, slot.id)
            placement_service.assign_container_to_parent(nested.id, parent.id)

            assert [c.code for c in container_service.get_containers(placement="racked")] == ["BIN-01"]
            assert [c.code for c in container_service.get_containers(placement="nested")] == ["BOX-01"]
            assert [c.code for c in container_service.get_containers(placement="unplaced")] == ["TOTE-01"]

    def test_filter_by_status(self, app: Flask, session: Session, container_service):
        with app.app_context():
            container_service.create_container("Bin #1")
            container_service.create_container("Bin #2", status=ContainerStatus.ARCHIVED)

            archived = container_service.get_containers(status=ContainerStatus.ARCHIVED)

            assert [c.code for c in archived] == ["BIN-02"]


class TestUpdateContainer:
    def test_code_is_immutable(self, app: Flask, session: Session, container_service):
        with app.app_context():
            container = container_service.create_container("Bin #1")

            updated = container_service.update_container(container.id, label="Bin #9")

            assert updated.label == "Bin #9"
            assert updated.code == "BIN-01"

    def test_setting_type_clears_legacy_type(
        self, app: Flask, session: Session, container_service, container_type_service
    ):
        with app.app_context():
            container_type = container_type_service.create_type("Plastic Bin", "BIN")
            container = container_service.create_container("Bin #1", legacy_type="Bin")

            container_service.update_container(container.id, container_type_id=container_type.id)

            assert container.container_type_id == container_type.id
            assert container.legacy_type is None


class TestDeleteContainer:
    """Test cases for deleting containers."""

    def test_deleting_racked_container_frees_slot(
        self, app: Flask, session: Session, rack_setup, container_service, placement_service
    ):
        with app.app_context():
            slot = session.query(Slot).filter_by(rack_id=rack_setup.id, row=0, col=0).one()
            container = container_service.create_container("Bin #1")
            placement_service.assign_container_to_slot(container.id, slot.id)
            container_id = container.id

            container_service.delete_container(container_id)

            assert session.get(Container, container_id) is None
            assert session.get(Slot, slot.id) is not None
            assert slot.container_id is None

    def test_container_with_items_cannot_be_deleted(
        self, app: Flask, session: Session, container_service, item_service
    ):
        with app.app_context():
            container = container_service.create_container("Bin #1")
            item_service.create_item("Lantern", container_id=container.id)

            with pytest.raises(DependencyException) as exc_info:
                container_service.delete_container(container.id)

            assert "still holds 1 item(s)" in str(exc_info.value)

    def test_container_with_children_cannot_be_deleted(
        self, app: Flask, session: Session, container_service, placement_service
    ):
        with app.app_context():
            parent = container_service.create_container("Tote #1")
            child = container_service.create_container("Bin #1")
            placement_service.assign_container_to_parent(child.id, parent.id)

            with pytest.raises(DependencyException):
                container_service.delete_container(parent.id)

    def test_container_with_movement_history_cannot_be_deleted(
        self, app: Flask, session: Session, container_service, item_service
    ):
        with app.app_context():
            source = container_service.create_container("Bin #1")
            target = container_service.create_container("Bin #2")
            item = item_service.create_item("Lantern", container_id=source.id)
            movement = item_service.move(item.id, target.id)

            with pytest.raises(DependencyException) as exc_info:
                container_service.delete_container(source.id)

            assert "1 item movement(s) reference it" in str(exc_info.value)
            assert session.get(Container, source.id) is not None
            assert movement.from_container_id == source.id


class TestContainerCapacity:
    def test_capacity_from_type(
        self, app: Flask, session: Session, container_service, container_type_service, item_service
    ):
        with app.app_context():
            container_type = container_type_service.create_type(
                "Test Crate", "CRATE", length=10, width=10, height=10
            )
            container = container_service.create_container("Crate #1", container_type_id=container_type.id)
            item_service.create_item("Books", container_id=container.id, volume=400)
            item_service.create_item("Lamp", container_id=container.id, volume=400)
            item_service.create_item("Cable", container_id=container.id)

            capacity = container_service.get_capacity(container.id)

            assert capacity.container_capacity == 1000
            assert capacity.total_item_volume == 800
            assert capacity.fill_percentage == 80
            assert capacity.items_with_volume == 2
            assert capacity.total_items == 3
            assert capacity.warning_level.value == "FILLING_UP"

    def test_capacity_without_type(self, app: Flask, session: Session, container_service):
        with app.app_context():
            container = container_service.create_container("Bin #1")

            capacity = container_service.get_capacity(container.id)

            assert capacity.has_capacity_data is False
            assert capacity.display_text == "Capacity tracking unavailable"
