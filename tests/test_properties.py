"""Properties: floor generation, layout sync, soft delete and manager scoping."""
from conftest import create_local, create_property, property_floors
from fastapi.testclient import TestClient

from exceptions import ValidationError
from main import app
from models import Floor, Property
from services.property_service import floor_levels, floor_name


class TestFloorNaming:

    def test_names(self):
        assert floor_name(-1) == "Basement"
        assert floor_name(0) == "Ground Floor"
        assert floor_name(1) == "1st Floor"
        assert floor_name(2) == "2nd Floor"
        assert floor_name(3) == "3rd Floor"
        assert floor_name(11) == "11th Floor"
        assert floor_name(22) == "22nd Floor"

    def test_levels(self):
        assert floor_levels(3, True) == [-1, 0, 1, 2]
        assert floor_levels(1, False) == [0]


class TestCreateProperty:

    def test_creates_floors(self, client, admin_headers):
        prop = create_property(client, admin_headers)
        assert prop["floors_count"] == 4
        assert prop["occupancy"]["total_locals"] == 0

        floors = property_floors(client, admin_headers, prop["id"])
        assert [f["name"] for f in floors] == ["Basement", "Ground Floor", "1st Floor", "2nd Floor"]
        assert [f["level_number"] for f in floors] == [-1, 0, 1, 2]

    def test_invalid_manager_creates_nothing(self, client, admin_headers, employee, db):
        response = client.post(
            "/api/properties",
            json={"name": "Tower", "location": "Kigali", "number_of_floors": 2, "manager_id": employee.id},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert db.query(Property).count() == 0
        assert db.query(Floor).count() == 0

    def test_floor_failure_rolls_back_property(self, client, admin_headers, db, monkeypatch):
        def failing_name(level_number):
            if level_number == 1:
                raise ValidationError("Floor could not be created")
            return floor_name(level_number)

        monkeypatch.setattr("services.property_service.floor_name", failing_name)
        response = client.post(
            "/api/properties",
            json={"name": "Tower", "location": "Kigali", "number_of_floors": 3},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert db.query(Property).count() == 0
        assert db.query(Floor).count() == 0

    def test_floor_insert_error_rolls_back_property(self, admin_headers, db, monkeypatch):
        monkeypatch.setattr("services.property_service.floor_levels", lambda number, basement: [0, 0])
        client = TestClient(app, raise_server_exceptions=False)
        response = client.post(
            "/api/properties",
            json={"name": "Tower", "location": "Kigali", "number_of_floors": 2},
            headers=admin_headers,
        )
        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Internal server error"}
        assert db.query(Property).count() == 0
        assert db.query(Floor).count() == 0

    def test_zero_floors_rejected(self, client, admin_headers):
        response = client.post(
            "/api/properties",
            json={"name": "Tower", "location": "Kigali", "number_of_floors": 0},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_manager_cannot_create(self, client, manager_headers):
        response = client.post(
            "/api/properties",
            json={"name": "Tower", "location": "Kigali"},
            headers=manager_headers,
        )
        assert response.status_code == 403


class TestFloorSync:

    def test_shrinking_removes_top_floor(self, client, admin_headers):
        prop = create_property(client, admin_headers)
        response = client.put(f"/api/properties/{prop['id']}", json={"number_of_floors": 2}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["floors_count"] == 3

        names = [f["name"] for f in property_floors(client, admin_headers, prop["id"])]
        assert names == ["Basement", "Ground Floor", "1st Floor"]

    def test_growing_back_restores_floor(self, client, admin_headers):
        prop = create_property(client, admin_headers, number_of_floors=2, has_basement=False)
        top = property_floors(client, admin_headers, prop["id"])[-1]
        client.put(f"/api/properties/{prop['id']}", json={"number_of_floors": 1}, headers=admin_headers)
        client.put(f"/api/properties/{prop['id']}", json={"number_of_floors": 2}, headers=admin_headers)

        floors = property_floors(client, admin_headers, prop["id"])
        assert floors[-1]["id"] == top["id"]

    def test_floor_with_locals_is_kept(self, client, admin_headers):
        prop = create_property(client, admin_headers)
        top = property_floors(client, admin_headers, prop["id"])[-1]
        create_local(client, admin_headers, prop["id"], top["id"])

        response = client.put(f"/api/properties/{prop['id']}", json={"number_of_floors": 2}, headers=admin_headers)
        assert response.status_code == 400
        assert "2nd Floor" in response.json()["message"]
        assert len(property_floors(client, admin_headers, prop["id"])) == 4


class TestSoftDelete:

    def test_delete_hides_property_and_children(self, client, admin_headers):
        prop = create_property(client, admin_headers)
        floor = property_floors(client, admin_headers, prop["id"])[1]
        local = create_local(client, admin_headers, prop["id"], floor["id"])

        response = client.delete(f"/api/properties/{prop['id']}", headers=admin_headers)
        assert response.json() == {"success": True, "message": "Property deleted successfully"}

        assert client.get(f"/api/properties/{prop['id']}", headers=admin_headers).status_code == 404
        assert client.get(f"/api/floors/{floor['id']}", headers=admin_headers).status_code == 404
        assert client.get(f"/api/locals/{local['id']}", headers=admin_headers).status_code == 404
        assert client.get("/api/properties", headers=admin_headers).json()["total"] == 0

    def test_restore_brings_children_back(self, client, admin_headers):
        prop = create_property(client, admin_headers)
        floor = property_floors(client, admin_headers, prop["id"])[1]
        local = create_local(client, admin_headers, prop["id"], floor["id"])
        client.delete(f"/api/properties/{prop['id']}", headers=admin_headers)

        response = client.patch(f"/api/properties/{prop['id']}/restore", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["floors_count"] == 4
        assert response.json()["data"]["locals_count"] == 1
        assert client.get(f"/api/locals/{local['id']}", headers=admin_headers).status_code == 200

    def test_restore_active_property_rejected(self, client, admin_headers):
        prop = create_property(client, admin_headers)
        response = client.patch(f"/api/properties/{prop['id']}/restore", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Property is not deleted"

    def test_restore_is_admin_only(self, client, admin_headers, manager_headers):
        prop = create_property(client, admin_headers)
        client.delete(f"/api/properties/{prop['id']}", headers=admin_headers)
        response = client.patch(f"/api/properties/{prop['id']}/restore", headers=manager_headers)
        assert response.status_code == 403


class TestManagerScope:

    def test_unassigned_property_is_hidden(self, client, admin_headers, manager_headers):
        prop = create_property(client, admin_headers)
        response = client.get(f"/api/properties/{prop['id']}", headers=manager_headers)
        assert response.status_code == 404
        assert client.get("/api/properties", headers=manager_headers).json()["total"] == 0

    def test_assigned_property_is_visible(self, client, admin_headers, manager, manager_headers):
        prop = create_property(client, admin_headers)
        create_property(client, admin_headers, name="Other")
        response = client.patch(
            f"/api/properties/{prop['id']}/assign-manager",
            json={"manager_id": manager.id},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["data"]["manager_name"] == "Mark Manager"

        assert client.get(f"/api/properties/{prop['id']}", headers=manager_headers).status_code == 200
        listing = client.get("/api/properties", headers=manager_headers).json()
        assert listing["total"] == 1
        assert listing["data"][0]["id"] == prop["id"]

    def test_manager_cannot_edit_structure(self, client, admin_headers, manager, manager_headers):
        prop = create_property(client, admin_headers, manager_id=manager.id)
        response = client.put(f"/api/properties/{prop['id']}", json={"name": "Renamed"}, headers=manager_headers)
        assert response.status_code == 403

    def test_unassign(self, client, admin_headers, manager, manager_headers):
        prop = create_property(client, admin_headers, manager_id=manager.id)
        response = client.patch(
            f"/api/properties/{prop['id']}/assign-manager",
            json={"manager_id": None},
            headers=admin_headers,
        )
        assert response.json()["message"] == "Manager unassigned successfully"
        assert client.get(f"/api/properties/{prop['id']}", headers=manager_headers).status_code == 404

    def test_employee_cannot_list(self, client, employee_headers):
        assert client.get("/api/properties", headers=employee_headers).status_code == 403


class TestPagination:

    def test_envelope(self, client, admin_headers):
        for i in range(3):
            create_property(client, admin_headers, name=f"Property {i}", number_of_floors=1, has_basement=False)
        body = client.get("/api/properties?page=2&limit=2", headers=admin_headers).json()
        assert body["success"] is True
        assert body["total"] == 3
        assert body["page"] == 2
        assert body["totalPages"] == 2
        assert len(body["data"]) == 1
