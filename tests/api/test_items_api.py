"""Tests for item API endpoints."""

import json

from flask.testing import FlaskClient
from sqlalchemy.orm import Session

from tote_inventory.models.slot import Slot
from tote_inventory.services.container import ServiceContainer


def _post(client: FlaskClient, url: str, data: dict | None = None):
    if data is None:
        return client.post(url)
    return client.post(url, data=json.dumps(data), content_type="application/json")


class TestItemCrudAPI:
    """Test cases for item CRUD endpoints."""

    def test_create_item(self, client: FlaskClient, session: Session, container: ServiceContainer):
        bin_container = container.container_service().create_container("Bin #1")
        session.commit()
        container_id = bin_container.id

        response = _post(client, "/api/items", {
            "name": "Camp stove",
            "container_id": container_id,
            "category": "CAMPING_OUTDOORS",
            "quantity": 2,
            "volume": 300,
            "tags": ["camp"],
        })

        assert response.status_code == 201
        data = json.loads(response.data)
        assert data["name"] == "Camp stove"
        assert data["status"] == "IN_STORAGE"
        assert data["container_id"] == container_id
        assert data["photos"] == []

    def test_create_item_invalid_quantity(self, client: FlaskClient):
        response = _post(client, "/api/items", {"name": "Rope", "quantity": 0})

        assert response.status_code == 400

    def test_create_item_unknown_container(self, client: FlaskClient):
        response = _post(client, "/api/items", {"name": "Rope", "container_id": 999})

        assert response.status_code == 404

    def test_list_items_by_status(self, client: FlaskClient, session: Session, container: ServiceContainer):
        item_service = container.item_service()
        lantern = item_service.create_item("Lantern")
        item_service.create_item("Rope")
        item_service.check_out(lantern.id)
        session.commit()

        response = client.get("/api/items?status=CHECKED_OUT")

        assert response.status_code == 200
        assert [i["name"] for i in json.loads(response.data)] == ["Lantern"]

    def test_update_item(self, client: FlaskClient, session: Session, container: ServiceContainer):
        item = container.item_service().create_item("Lantern")
        session.commit()
        item_id = item.id

        response = client.put(
            f"/api/items/{item_id}",
            data=json.dumps({"notes": "needs batteries", "volume": 120}),
            content_type="application/json",
        )

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["notes"] == "needs batteries"
        assert data["volume"] == 120

    def test_delete_requires_confirm(self, client: FlaskClient, session: Session, container: ServiceContainer):
        item = container.item_service().create_item("Lantern")
        session.commit()
        item_id = item.id

        response = client.delete(f"/api/items/{item_id}")
        assert response.status_code == 400
        assert json.loads(response.data)["details"]["code"] == "CONFIRMATION_REQUIRED"

        response = client.delete(f"/api/items/{item_id}?confirm=true")
        assert response.status_code == 204
        assert client.get(f"/api/items/{item_id}").status_code == 404

    def test_delete_item_with_history(self, client: FlaskClient, session: Session, container: ServiceContainer):
        item = container.item_service().create_item("Lantern")
        container.item_service().check_out(item.id)
        session.commit()
        item_id = item.id

        response = client.delete(f"/api/items/{item_id}?confirm=true")

        assert response.status_code == 409


class TestItemMovementAPI:
    """Test cases for movement endpoints."""

    def test_full_lifecycle(self, client: FlaskClient, session: Session, container: ServiceContainer):
        first = container.container_service().create_container("Bin #1")
        second = container.container_service().create_container("Bin #2")
        item = container.item_service().create_item("Lantern", container_id=first.id)
        accounts = container.account_service().seed_test_accounts()
        session.commit()
        item_id, first_id, second_id, user_id = item.id, first.id, second.id, accounts.user.id

        response = _post(client, f"/api/items/{item_id}/check-out", {"actor_id": user_id, "notes": "trip"})
        assert response.status_code == 201
        assert json.loads(response.data)["action"] == "check_out"
        assert json.loads(response.data)["actor_id"] == user_id

        response = _post(client, f"/api/items/{item_id}/check-in")
        assert response.status_code == 201

        response = _post(client, f"/api/items/{item_id}/move", {"to_container_id": second_id})
        assert response.status_code == 201
        movement = json.loads(response.data)
        assert movement["from_container_id"] == first_id
        assert movement["to_container_id"] == second_id

        response = _post(client, f"/api/items/{item_id}/remove", {"notes": "worn out"})
        assert response.status_code == 201

        response = client.get(f"/api/items/{item_id}/movements")
        assert response.status_code == 200
        assert [m["action"] for m in json.loads(response.data)] == ["check_out", "check_in", "move", "remove"]

        item_data = json.loads(client.get(f"/api/items/{item_id}").data)
        assert item_data["status"] == "DISCARDED"
        assert item_data["container_id"] is None

    def test_check_in_not_checked_out(self, client: FlaskClient, session: Session, container: ServiceContainer):
        item = container.item_service().create_item("Lantern")
        session.commit()
        item_id = item.id

        response = _post(client, f"/api/items/{item_id}/check-in")

        assert response.status_code == 409
        assert client.get(f"/api/items/{item_id}/movements").get_json() == []

    def test_move_requires_destination(self, client: FlaskClient, session: Session, container: ServiceContainer):
        item = container.item_service().create_item("Lantern")
        session.commit()
        item_id = item.id

        response = _post(client, f"/api/items/{item_id}/move", {"notes": "somewhere"})

        assert response.status_code == 400


class TestItemPhotosAndSlotsAPI:
    def test_add_and_delete_photo(self, client: FlaskClient, session: Session, container: ServiceContainer):
        item = container.item_service().create_item("Lantern")
        session.commit()
        item_id = item.id

        response = _post(client, f"/api/items/{item_id}/photos", {"url": "https://example.com/a.jpg"})
        assert response.status_code == 201
        photo_id = json.loads(response.data)["id"]

        item_data = json.loads(client.get(f"/api/items/{item_id}").data)
        assert [p["url"] for p in item_data["photos"]] == ["https://example.com/a.jpg"]

        response = client.delete(f"/api/items/{item_id}/photos/{photo_id}")
        assert response.status_code == 204

    def test_container_item_in_slot(
        self, client: FlaskClient, session: Session, rack_setup, container: ServiceContainer
    ):
        slot_id = session.query(Slot).filter_by(rack_id=rack_setup.id, row=1, col=0).one().id
        cooler = container.item_service().create_item("Cooler", is_container=True)
        lantern = container.item_service().create_item("Lantern")
        session.commit()
        cooler_id, lantern_id = cooler.id, lantern.id

        response = client.put(
            f"/api/items/{lantern_id}/slot", data=json.dumps({"slot_id": slot_id}), content_type="application/json"
        )
        assert response.status_code == 409

        response = client.put(
            f"/api/items/{cooler_id}/slot", data=json.dumps({"slot_id": slot_id}), content_type="application/json"
        )
        assert response.status_code == 200
        assert json.loads(response.data)["current_slot_id"] == slot_id

        response = client.delete(f"/api/items/{cooler_id}/slot")
        assert response.status_code == 200
        assert json.loads(response.data)["current_slot_id"] is None
