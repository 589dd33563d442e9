"""Error envelope, health check and the remaining resources (floors, locals, tenants, expenses, payment modes)."""
from conftest import create_local, create_payment_mode, create_property, create_tenant, property_floors
from sqlalchemy import inspect

import jobs
from database import check_connection, engine
from models import Base


class TestErrorEnvelope:

    def test_health(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["database"] == "up"

    def test_health_reports_database_down(self, client, monkeypatch):
        monkeypatch.setattr("main.check_connection", lambda: False)
        response = client.get("/")
        assert response.status_code == 503
        assert response.json() == {"success": False, "message": "Database unavailable", "database": "down"}

    def test_unknown_route(self, client):
        response = client.get("/api/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Route not found"}

    def test_validation_error_is_400(self, client, admin_headers):
        response = client.post("/api/properties", json={"location": "Kigali"}, headers=admin_headers)
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"].startswith("name:")

    def test_bad_page_number(self, client, admin_headers):
        response = client.get("/api/properties?page=0", headers=admin_headers)
        assert response.status_code == 400


class TestFloors:

    def test_rename_and_relevel(self, client, admin_headers):
        prop = create_property(client, admin_headers, number_of_floors=2, has_basement=False)
        top = property_floors(client, admin_headers, prop["id"])[-1]
        response = client.put(
            f"/api/floors/{top['id']}",
            json={"name": "Rooftop", "level_number": 5},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Rooftop"
        assert response.json()["data"]["level_number"] == 5

    def test_level_clash(self, client, admin_headers):
        prop = create_property(client, admin_headers, number_of_floors=2, has_basement=False)
        top = property_floors(client, admin_headers, prop["id"])[-1]
        response = client.put(f"/api/floors/{top['id']}", json={"level_number": 0}, headers=admin_headers)
        assert response.status_code == 409

    def test_floor_with_locals_cannot_be_deleted(self, client, admin_headers):
        prop = create_property(client, admin_headers, number_of_floors=1, has_basement=False)
        floor = property_floors(client, admin_headers, prop["id"])[0]
        create_local(client, admin_headers, prop["id"], floor["id"])
        response = client.delete(f"/api/floors/{floor['id']}", headers=admin_headers)
        assert response.status_code == 400

    def test_delete_and_restore(self, client, admin_headers):
        prop = create_property(client, admin_headers, number_of_floors=2, has_basement=False)
        floor = property_floors(client, admin_headers, prop["id"])[-1]
        assert client.delete(f"/api/floors/{floor['id']}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/floors/{floor['id']}", headers=admin_headers).status_code == 404
        assert client.patch(f"/api/floors/{floor['id']}/restore", headers=admin_headers).status_code == 200

    def test_detail_lists_locals(self, client, admin_headers):
        prop = create_property(client, admin_headers, number_of_floors=1, has_basement=False)
        floor = property_floors(client, admin_headers, prop["id"])[0]
        create_local(client, admin_headers, prop["id"], floor["id"], reference_code="G-2")
        create_local(client, admin_headers, prop["id"], floor["id"], reference_code="G-1")
        data = client.get(f"/api/floors/{floor['id']}", headers=admin_headers).json()["data"]
        assert [local["reference_code"] for local in data["locals"]] == ["G-1", "G-2"]
        assert data["locals_count"] == 2


class TestLocals:

    def test_floor_must_belong_to_property(self, client, admin_headers):
        first = create_property(client, admin_headers, name="First", number_of_floors=1, has_basement=False)
        second = create_property(client, admin_headers, name="Second", number_of_floors=1, has_basement=False)
        other_floor = property_floors(client, admin_headers, second["id"])[0]
        response = client.post(
            "/api/locals",
            json={"reference_code": "X-1", "property_id": first["id"], "floor_id": other_floor["id"]},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Floor does not belong to the selected property"

    def test_filters(self, client, admin_headers):
        prop = create_property(client, admin_headers, number_of_floors=2, has_basement=False)
        floors = property_floors(client, admin_headers, prop["id"])
        create_local(client, admin_headers, prop["id"], floors[0]["id"], reference_code="G-1", status="occupied")
        create_local(client, admin_headers, prop["id"], floors[1]["id"], reference_code="F-1")

        assert client.get("/api/locals?status=occupied", headers=admin_headers).json()["total"] == 1
        assert client.get(f"/api/locals?floorId={floors[1]['id']}", headers=admin_headers).json()["total"] == 1
        assert client.get(f"/api/properties/{prop['id']}/locals", headers=admin_headers).json()["total"] == 2

    def test_restore_needs_active_floor(self, client, admin_headers):
        prop = create_property(client, admin_headers, number_of_floors=1, has_basement=False)
        local = create_local(client, admin_headers, prop["id"], property_floors(client, admin_headers, prop["id"])[0]["id"])
        client.delete(f"/api/properties/{prop['id']}", headers=admin_headers)
        response = client.patch(f"/api/locals/{local['id']}/restore", headers=admin_headers)
        assert response.status_code == 400

    def test_structural_edit_is_admin_only(self, client, admin_headers, employee_headers):
        prop = create_property(client, admin_headers, number_of_floors=1, has_basement=False)
        local = create_local(client, admin_headers, prop["id"], property_floors(client, admin_headers, prop["id"])[0]["id"])
        response = client.patch(f"/api/locals/{local['id']}", json={"reference_code": "Z"}, headers=employee_headers)
        assert response.status_code == 403


class TestTenants:

    def test_search(self, client, admin_headers):
        create_tenant(client, admin_headers, name="John Doe", company_name="Acme Ltd")
        create_tenant(client, admin_headers, name="Mary Smith", company_name="Globex", tin_number="998877")
        assert client.get("/api/tenants?search=acme", headers=admin_headers).json()["total"] == 1
        assert client.get("/api/tenants?search=9988", headers=admin_headers).json()["total"] == 1
        assert client.get("/api/tenants", headers=admin_headers).json()["total"] == 2

    def test_manager_manages_tenants(self, client, manager_headers):
        tenant = create_tenant(client, manager_headers)
        response = client.patch(f"/api/tenants/{tenant['id']}", json={"phone": "+250788000000"}, headers=manager_headers)
        assert response.json()["data"]["phone"] == "+250788000000"

    def test_delete_and_restore(self, client, admin_headers):
        tenant = create_tenant(client, admin_headers)
        client.delete(f"/api/tenants/{tenant['id']}", headers=admin_headers)
        assert client.get(f"/api/tenants/{tenant['id']}", headers=admin_headers).status_code == 404
        assert client.patch(f"/api/tenants/{tenant['id']}/restore", headers=admin_headers).status_code == 200


class TestExpenses:

    def test_property_expense(self, client, admin_headers):
        prop = create_property(client, admin_headers, number_of_floors=1, has_basement=False)
        response = client.post(
            "/api/expenses",
            json={"amount": 150, "category": "maintenance", "property_id": prop["id"]},
            headers=admin_headers,
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["amount"] == 150
        assert data["property_name"] == prop["name"]
        assert data["date"]

    def test_local_must_belong_to_property(self, client, admin_headers):
        first = create_property(client, admin_headers, name="First", number_of_floors=1, has_basement=False)
        second = create_property(client, admin_headers, name="Second", number_of_floors=1, has_basement=False)
        local = create_local(client, admin_headers, second["id"], property_floors(client, admin_headers, second["id"])[0]["id"])
        response = client.post(
            "/api/expenses",
            json={"amount": 10, "category": "repairs", "property_id": first["id"], "local_id": local["id"]},
            headers=admin_headers,
        )
        assert response.status_code == 400

    def test_manager_scope(self, client, admin_headers, manager, manager_headers):
        managed = create_property(client, admin_headers, name="Managed", number_of_floors=1, has_basement=False, manager_id=manager.id)
        other = create_property(client, admin_headers, name="Other", number_of_floors=1, has_basement=False)
        for prop in (managed, other):
            client.post(
                "/api/expenses",
                json={"amount": 10, "category": "cleaning", "property_id": prop["id"]},
                headers=admin_headers,
            )
        body = client.get("/api/expenses", headers=manager_headers).json()
        assert body["total"] == 1
        assert body["data"][0]["property_id"] == managed["id"]


class TestPaymentModes:

    def test_duplicate_code(self, client, admin_headers):
        create_payment_mode(client, admin_headers)
        response = client.post("/api/payment-modes", json={"code": "BANK", "displayName": "Bank"}, headers=admin_headers)
        assert response.status_code == 409

    def test_every_role_reads(self, client, admin_headers, employee_headers):
        create_payment_mode(client, admin_headers)
        body = client.get("/api/payment-modes", headers=employee_headers).json()
        assert body["total"] == 1
        assert body["data"][0]["displayName"] == "Bank transfer"
        assert body["data"][0]["requiresProof"] is True

    def test_only_admin_edits(self, client, manager_headers):
        response = client.post("/api/payment-modes", json={"code": "CASH", "displayName": "Cash"}, headers=manager_headers)
        assert response.status_code == 403


class TestMaintenanceJobs:

    def test_init_db_creates_tables(self):
        Base.metadata.drop_all(bind=engine)
        assert jobs.main(["init-db"]) == 0
        assert {"users", "properties", "leases", "payments"} <= set(inspect(engine).get_table_names())
        assert check_connection() is True
