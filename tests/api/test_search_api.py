"""Tests for global search and QR deep links."""

import json

from flask.testing import FlaskClient
from sqlalchemy.orm import Session

from tote_inventory.services.container import ServiceContainer


class TestSearchAPI:
    def test_search(self, client: FlaskClient, session: Session, container: ServiceContainer):
        bin_container = container.container_service().create_container("Camping Bin #1")
        container.item_service().create_item("Camp stove", container_id=bin_container.id)
        session.commit()

        response = client.get("/api/search?q=camp")

        assert response.status_code == 200
        data = json.loads(response.data)
        assert [c["code"] for c in data["containers"]] == ["CAMPINGBIN-01"]
        assert data["containers"][0]["location_name"] == "Unassigned"
        assert [i["name"] for i in data["items"]] == ["Camp stove"]
        assert data["locations"] == []

    def test_single_character_query(self, client: FlaskClient, session: Session, container: ServiceContainer):
        container.container_service().create_container("Camping Bin #1")
        session.commit()

        response = client.get("/api/search?q=c")

        assert response.status_code == 200
        assert json.loads(response.data) == {"containers": [], "items": [], "locations": []}

    def test_missing_query(self, client: FlaskClient):
        response = client.get("/api/search")

        assert response.status_code == 200
        assert json.loads(response.data)["containers"] == []


class TestScanRedirect:
    """Test cases for /c/<code> QR links."""

    def test_known_code_redirects(self, client: FlaskClient, session: Session, container: ServiceContainer):
        created = container.container_service().create_container("Bin #4")
        session.commit()
        container_id = created.id

        response = client.get("/c/BIN-04")

        assert response.status_code == 302
        assert response.headers["Location"].endswith(f"/api/containers/{container_id}")

    def test_unknown_code(self, client: FlaskClient):
        response = client.get("/c/NOPE-99")

        assert response.status_code == 404
        assert json.loads(response.data)["details"]["code"] == "RECORD_NOT_FOUND"
