"""Tests for location, rack and slot API endpoints."""

import json

from flask.testing import FlaskClient
from sqlalchemy.orm import Session

from tote_inventory.models.slot import Slot
from tote_inventory.services.container import ServiceContainer


def _post(client: FlaskClient, url: str, data: dict):
    return client.post(url, data=json.dumps(data), content_type="application/json")


class TestLocationAPI:
    def test_create_and_list_locations(self, client: FlaskClient):
        response = _post(client, "/api/locations", {"name": "Garage", "notes": "Left wall"})

        assert response.status_code == 201
        created = json.loads(response.data)
        assert created["name"] == "Garage"

        response = client.get("/api/locations")
        assert response.status_code == 200
        assert [(loc["name"], loc["rack_count"]) for loc in json.loads(response.data)] == [("Garage", 0)]

    def test_duplicate_location(self, client: FlaskClient, session: Session, container: ServiceContainer):
        container.location_service().create_location("Garage")
        session.commit()

        response = _post(client, "/api/locations", {"name": "Garage"})

        assert response.status_code == 409

    def test_delete_location_with_racks(
        self, client: FlaskClient, session: Session, container: ServiceContainer
    ):
        location = container.location_service().create_location("Garage")
        container.rack_service().create_rack("Shelf", 1, 1, location.id)
        session.commit()
        location_id = location.id

        response = client.delete(f"/api/locations/{location_id}")

        assert response.status_code == 409
        assert "it still has 1 rack(s)" in json.loads(response.data)["error"]


class TestRackAPI:
    """Test cases for rack endpoints."""

    def test_create_rack(self, client: FlaskClient, session: Session, container: ServiceContainer):
        location = container.location_service().create_location("Garage")
        session.commit()

        response = _post(
            client, "/api/racks", {"name": "Shelf A", "rows": 3, "cols": 4, "location_id": location.id}
        )

        assert response.status_code == 201
        data = json.loads(response.data)
        assert data["slot_count"] == 12
        assert data["rows"] == 3
        assert data["cols"] == 4

    def test_create_rack_invalid_dimensions(self, client: FlaskClient, session: Session, container: ServiceContainer):
        location = container.location_service().create_location("Garage")
        session.commit()

        response = _post(client, "/api/racks", {"name": "Shelf A", "rows": 0, "cols": 4, "location_id": location.id})

        assert response.status_code == 400

    def test_create_rack_unknown_location(self, client: FlaskClient):
        response = _post(client, "/api/racks", {"name": "Shelf A", "rows": 1, "cols": 1, "location_id": 999})

        assert response.status_code == 404

    def test_rack_cannot_be_resized(self, client: FlaskClient, session: Session, rack_setup):
        session.commit()
        rack_id = rack_setup.id

        response = client.put(
            f"/api/racks/{rack_id}", data=json.dumps({"rows": 5}), content_type="application/json"
        )

        assert response.status_code == 400

    def test_rack_grid(self, client: FlaskClient, session: Session, rack_setup, container: ServiceContainer):
        slot = session.query(Slot).filter_by(rack_id=rack_setup.id, row=1, col=2).one()
        bin_container = container.container_service().create_container("Bin #1")
        container.container_service().create_container("Bin #2")
        container.placement_service().assign_container_to_slot(bin_container.id, slot.id)
        session.commit()
        rack_id = rack_setup.id

        response = client.get(f"/api/racks/{rack_id}/grid")

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["rack"]["name"] == "Garage Rack"
        assert [s["label"] for s in data["slots"]] == ["A1", "A2", "A3", "B1", "B2", "B3"]
        occupied = [s for s in data["slots"] if s["is_occupied"]]
        assert len(occupied) == 1
        assert occupied[0]["label"] == "B3"
        assert occupied[0]["container"]["code"] == "BIN-01"
        assert [c["code"] for c in data["unplaced_containers"]] == ["BIN-02"]

    def test_get_slot(self, client: FlaskClient, session: Session, rack_setup):
        slot_id = session.query(Slot).filter_by(rack_id=rack_setup.id, row=0, col=1).one().id
        session.commit()

        response = client.get(f"/api/slots/{slot_id}")

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["label"] == "A2"
        assert data["container"] is None

    def test_delete_rack_with_occupied_slot(
        self, client: FlaskClient, session: Session, rack_setup, container: ServiceContainer
    ):
        slot = session.query(Slot).filter_by(rack_id=rack_setup.id, row=0, col=0).one()
        bin_container = container.container_service().create_container("Bin #1")
        container.placement_service().assign_container_to_slot(bin_container.id, slot.id)
        session.commit()
        rack_id = rack_setup.id

        response = client.delete(f"/api/racks/{rack_id}")

        assert response.status_code == 409
