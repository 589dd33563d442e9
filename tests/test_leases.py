"""Leases: references, date checks, status transitions, expiry and the PDF report."""
from datetime import date, timedelta

from conftest import create_lease

import jobs
from models import Lease, LeaseStatus
from services.lease_lifecycle import expire_leases
from services.lease_service import slugify_name

PAST_START = date(2024, 1, 1)
PAST_END = date(2024, 6, 30)


class TestReference:

    def test_slug(self):
        assert slugify_name("John Doe") == "JOHN-DOE"
        assert slugify_name("  O'Neil & Sons ") == "O-NEIL-SONS"
        assert slugify_name("") == "TENANT"

    def test_generated_from_tenant_name(self, client, admin_headers, rented_local):
        lease = create_lease(client, admin_headers, rented_local["local"]["id"], rented_local["tenant"]["id"])
        assert lease["reference"].startswith("LEASE-JOHN-DOE-")
        assert lease["status"] == "active"
        assert lease["totalPaid"] == 0
        assert lease["balance"] == 1200
        assert lease["tenant"]["name"] == "John Doe"

    def test_client_reference_ignored(self, client, admin_headers, rented_local):
        lease = create_lease(
            client,
            admin_headers,
            rented_local["local"]["id"],
            rented_local["tenant"]["id"],
            reference="MINE",
        )
        assert lease["reference"] != "MINE"


class TestValidation:

    def test_end_before_start(self, client, admin_headers, rented_local):
        response = client.post(
            "/api/leases",
            json={
                "startDate": "2025-06-01",
                "endDate": "2025-01-01",
                "leaseAmount": 100,
                "localId": rented_local["local"]["id"],
                "tenantId": rented_local["tenant"]["id"],
            },
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "endDate must be after startDate"}

    def test_update_checks_dates_against_stored_ones(self, client, admin_headers, rented_local):
        lease = create_lease(client, admin_headers, rented_local["local"]["id"], rented_local["tenant"]["id"])
        response = client.put(
            f"/api/leases/{lease['id']}",
            json={"endDate": (date.today() - timedelta(days=60)).isoformat()},
            headers=admin_headers,
        )
        assert response.status_code == 400

    def test_unknown_tenant(self, client, admin_headers, rented_local):
        response = client.post(
            "/api/leases",
            json={
                "startDate": "2025-01-01",
                "endDate": "2025-12-31",
                "leaseAmount": 100,
                "localId": rented_local["local"]["id"],
                "tenantId": 999,
            },
            headers=admin_headers,
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Tenant not found"


class TestTransitions:

    def test_cancel_active_lease(self, client, admin_headers, rented_local):
        lease = create_lease(client, admin_headers, rented_local["local"]["id"], rented_local["tenant"]["id"])
        response = client.put(f"/api/leases/{lease['id']}", json={"status": "cancelled"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "cancelled"

    def test_cancelled_is_terminal(self, client, admin_headers, rented_local):
        lease = create_lease(client, admin_headers, rented_local["local"]["id"], rented_local["tenant"]["id"])
        client.put(f"/api/leases/{lease['id']}", json={"status": "cancelled"}, headers=admin_headers)
        response = client.put(f"/api/leases/{lease['id']}", json={"status": "active"}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Cannot change lease status from cancelled to active"

    def test_expired_cannot_reactivate(self):
        lease = Lease(status=LeaseStatus.EXPIRED)
        assert not lease.can_transition_to(LeaseStatus.ACTIVE)
        assert lease.can_transition_to(LeaseStatus.CANCELLED)
        assert lease.can_transition_to(LeaseStatus.EXPIRED)


class TestExpiry:

    def _past_leases(self, client, headers, rented_local, n):
        for _ in range(n):
            create_lease(
                client,
                headers,
                rented_local["local"]["id"],
                rented_local["tenant"]["id"],
                start=PAST_START,
                end=PAST_END,
            )

    def test_trigger_is_idempotent(self, client, admin_headers, rented_local):
        self._past_leases(client, admin_headers, rented_local, 3)
        current = create_lease(client, admin_headers, rented_local["local"]["id"], rented_local["tenant"]["id"])

        first = client.post("/api/leases/trigger-expired", headers=admin_headers)
        assert first.status_code == 200
        assert first.json() == {"success": True, "message": "3 lease(s) marked as expired.", "count": 3}

        second = client.post("/api/leases/trigger-expired", headers=admin_headers)
        assert second.json()["message"] == "0 lease(s) marked as expired."

        still_active = client.get(f"/api/leases/{current['id']}", headers=admin_headers).json()["data"]
        assert still_active["status"] == "active"
        expired = client.get("/api/leases?status=expired", headers=admin_headers).json()
        assert expired["total"] == 3

    def test_cancelled_leases_untouched(self, client, admin_headers, rented_local, db):
        self._past_leases(client, admin_headers, rented_local, 1)
        lease_id = client.get("/api/leases", headers=admin_headers).json()["data"][0]["id"]
        client.put(f"/api/leases/{lease_id}", json={"status": "cancelled"}, headers=admin_headers)

        assert expire_leases(db) == 0

    def test_deleted_leases_untouched(self, client, admin_headers, rented_local, db):
        self._past_leases(client, admin_headers, rented_local, 1)
        lease_id = client.get("/api/leases", headers=admin_headers).json()["data"][0]["id"]
        client.delete(f"/api/leases/{lease_id}", headers=admin_headers)

        assert expire_leases(db) == 0

    def test_end_date_today_is_not_expired(self, client, admin_headers, rented_local, db):
        create_lease(
            client,
            admin_headers,
            rented_local["local"]["id"],
            rented_local["tenant"]["id"],
            start=date.today() - timedelta(days=30),
            end=date.today(),
        )
        assert expire_leases(db) == 0
        assert expire_leases(db, today=date.today() + timedelta(days=1)) == 1

    def test_trigger_is_admin_only(self, client, manager_headers):
        assert client.post("/api/leases/trigger-expired", headers=manager_headers).status_code == 403

    def test_scheduled_job(self, client, admin_headers, rented_local):
        self._past_leases(client, admin_headers, rented_local, 2)
        assert jobs.main(["expire-leases"]) == 0
        assert client.get("/api/leases?status=expired", headers=admin_headers).json()["total"] == 2


class TestScope:

    def test_manager_cannot_lease_unmanaged_local(self, client, manager_headers, rented_local):
        response = client.post(
            "/api/leases",
            json={
                "startDate": "2025-01-01",
                "endDate": "2025-12-31",
                "leaseAmount": 100,
                "localId": rented_local["local"]["id"],
                "tenantId": rented_local["tenant"]["id"],
            },
            headers=manager_headers,
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Local not found"

    def test_manager_lists_managed_leases(self, client, admin_headers, manager, manager_headers, rented_local):
        create_lease(client, admin_headers, rented_local["local"]["id"], rented_local["tenant"]["id"])
        assert client.get("/api/leases", headers=manager_headers).json()["total"] == 0

        client.patch(
            f"/api/properties/{rented_local['property']['id']}/assign-manager",
            json={"manager_id": manager.id},
            headers=admin_headers,
        )
        assert client.get("/api/leases", headers=manager_headers).json()["total"] == 1


class TestLeasedLocalRemoval:

    def test_local_with_active_lease_cannot_be_deleted(self, client, admin_headers, rented_local):
        create_lease(client, admin_headers, rented_local["local"]["id"], rented_local["tenant"]["id"])
        response = client.delete(f"/api/locals/{rented_local['local']['id']}", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Cannot delete a local with 1 active lease(s)"
        assert client.get("/api/leases", headers=admin_headers).json()["total"] == 1

    def test_property_with_active_lease_cannot_be_deleted(self, client, admin_headers, rented_local):
        create_lease(client, admin_headers, rented_local["local"]["id"], rented_local["tenant"]["id"])
        response = client.delete(f"/api/properties/{rented_local['property']['id']}", headers=admin_headers)
        assert response.status_code == 400
        assert client.get(f"/api/properties/{rented_local['property']['id']}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/locals/{rented_local['local']['id']}", headers=admin_headers).status_code == 200

    def test_ended_lease_stays_listed_after_local_removal(self, client, admin_headers, rented_local):
        lease = create_lease(client, admin_headers, rented_local["local"]["id"], rented_local["tenant"]["id"])
        client.put(f"/api/leases/{lease['id']}", json={"status": "cancelled"}, headers=admin_headers)

        response = client.delete(f"/api/locals/{rented_local['local']['id']}", headers=admin_headers)
        assert response.status_code == 200

        assert client.get(f"/api/leases/{lease['id']}", headers=admin_headers).status_code == 200
        listed = client.get("/api/leases", headers=admin_headers).json()
        assert listed["total"] == 1
        assert listed["data"][0]["id"] == lease["id"]


class TestReport:

    def test_pdf(self, client, admin_headers, rented_local):
        create_lease(client, admin_headers, rented_local["local"]["id"], rented_local["tenant"]["id"])
        response = client.get("/api/report/pdf", headers=admin_headers)
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "attachment; filename=leases_report_" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_pdf_forbidden_for_employee(self, client, employee_headers):
        assert client.get("/api/report/pdf", headers=employee_headers).status_code == 403
