"""Authentication, account administration and profile."""
import io

from conftest import PASSWORD, auth, make_user
from PIL import Image

import jobs
from models import User, UserRole


def login(client, email, password=PASSWORD):
    return client.post("/api/auth/login", json={"email": email, "password": password})


class TestLogin:

    def test_success(self, client, admin):
        response = login(client, "Admin@LandlordPro.rw")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["token"]
        assert body["user"]["role"] == "admin"
        assert "password_hash" not in body["user"]

        profile = client.get("/api/profile", headers={"Authorization": f"Bearer {body['token']}"})
        assert profile.json()["data"]["email"] == "admin@landlordpro.rw"

    def test_wrong_password(self, client, admin):
        response = login(client, admin.email, "not-the-password")
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Invalid email or password"}

    def test_unknown_email(self, client):
        assert login(client, "nobody@landlordpro.rw").status_code == 401

    def test_disabled_account(self, client):
        make_user("gone@landlordpro.rw", UserRole.EMPLOYEE, is_active=False)
        assert login(client, "gone@landlordpro.rw").status_code == 403


class TestTokens:

    def test_missing_token(self, client):
        response = client.get("/api/properties")
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Missing token"}

    def test_invalid_token(self, client):
        response = client.get("/api/properties", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    def test_disabled_user_token_rejected(self, client, admin_headers, employee, employee_headers):
        client.put(f"/api/users/{employee.id}/disable", headers=admin_headers)
        response = client.get("/api/profile", headers=employee_headers)
        assert response.status_code == 403


class TestRegister:

    def test_admin_registers_manager(self, client, admin_headers):
        response = client.post(
            "/api/register",
            json={"full_name": "Jane Manager", "email": "Jane@LandlordPro.rw", "password": "secret123", "role": "manager"},
            headers=admin_headers,
        )
        assert response.status_code == 201
        user = response.json()["data"]
        assert user["email"] == "jane@landlordpro.rw"
        assert user["role"] == "manager"
        assert login(client, "jane@landlordpro.rw").status_code == 200

        welcome = client.get("/api/notifications/all", headers=admin_headers).json()["data"]
        assert [n["type"] for n in welcome if n["user_id"] == user["id"]] == ["user_register"]

    def test_duplicate_email(self, client, admin, admin_headers):
        response = client.post(
            "/api/register",
            json={"full_name": "Again", "email": admin.email, "password": "secret123"},
            headers=admin_headers,
        )
        assert response.status_code == 409
        assert response.json()["message"] == "Email already registered"

    def test_only_admins_register(self, client, manager_headers):
        response = client.post(
            "/api/register",
            json={"full_name": "Someone", "email": "someone@landlordpro.rw", "password": "secret123"},
            headers=manager_headers,
        )
        assert response.status_code == 403


class TestAccountAdministration:

    def test_disable_and_enable(self, client, admin_headers, employee):
        disabled = client.put(f"/api/users/{employee.id}/disable", headers=admin_headers)
        assert disabled.status_code == 200
        assert disabled.json()["data"]["is_active"] is False

        again = client.put(f"/api/users/{employee.id}/disable", headers=admin_headers)
        assert again.status_code == 400
        assert again.json()["message"] == "User is already disabled"

        enabled = client.put(f"/api/users/{employee.id}/enable", headers=admin_headers)
        assert enabled.json()["data"]["is_active"] is True

        types = [
            n["type"]
            for n in client.get("/api/notifications/all", headers=admin_headers).json()["data"]
            if n["user_id"] == employee.id
        ]
        assert sorted(types) == ["user_disable", "user_enable"]

    def test_cannot_disable_self(self, client, admin, admin_headers):
        response = client.put(f"/api/users/{admin.id}/disable", headers=admin_headers)
        assert response.status_code == 400

    def test_update_user_notifies(self, client, admin_headers, employee):
        response = client.put(f"/api/users/{employee.id}", json={"role": "manager"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["role"] == "manager"

        mine = client.get("/api/notifications", headers=auth(employee)).json()["data"]
        assert mine[0]["type"] == "user_update"

    def test_list_by_role(self, client, admin_headers, manager, employee):
        body = client.get("/api/users?role=manager", headers=admin_headers).json()
        assert body["total"] == 1
        assert body["data"][0]["id"] == manager.id

    def test_unknown_user(self, client, admin_headers):
        assert client.put("/api/users/999/enable", headers=admin_headers).status_code == 404


class TestProfile:

    def test_change_password(self, client, employee, employee_headers):
        wrong = client.put(
            "/api/profile/password",
            json={"current_password": "nope", "new_password": "another123"},
            headers=employee_headers,
        )
        assert wrong.status_code == 400
        assert wrong.json()["message"] == "Current password is incorrect"

        ok = client.put(
            "/api/profile/password",
            json={"current_password": PASSWORD, "new_password": "another123"},
            headers=employee_headers,
        )
        assert ok.status_code == 200
        assert login(client, employee.email, "another123").status_code == 200

    def test_update_profile_email_conflict(self, client, admin, employee_headers):
        response = client.put("/api/profile", json={"email": admin.email}, headers=employee_headers)
        assert response.status_code == 409

    def _upload_avatar(self, client, headers, width=900, height=600):
        buffer = io.BytesIO()
        Image.new("RGB", (width, height), (10, 120, 200)).save(buffer, format="JPEG")
        return client.put(
            "/api/profile/picture",
            files={"avatar": ("me.jpg", buffer.getvalue(), "image/jpeg")},
            headers=headers,
        )

    def test_avatar_upload(self, client, employee_headers):
        response = self._upload_avatar(client, employee_headers)
        assert response.status_code == 200
        avatar = response.json()["data"]["avatar"]
        assert avatar.startswith("/uploads/avatars/")

        stored = client.get(avatar)
        assert stored.status_code == 200
        with Image.open(io.BytesIO(stored.content)) as image:
            assert image.format == "JPEG"
            assert image.size == (300, 200)

    def test_new_avatar_replaces_old_file(self, client, employee_headers):
        first = self._upload_avatar(client, employee_headers).json()["data"]["avatar"]
        second = self._upload_avatar(client, employee_headers, width=200, height=200).json()["data"]["avatar"]
        assert first != second
        assert client.get(first).status_code == 404
        assert client.get(second).status_code == 200

    def test_avatar_must_be_image(self, client, employee_headers):
        response = client.put(
            "/api/profile/picture",
            files={"avatar": ("me.pdf", b"%PDF", "application/pdf")},
            headers=employee_headers,
        )
        assert response.status_code == 400


class TestNotifications:

    def _notified(self, client, admin_headers, user) -> dict:
        client.put(f"/api/users/{user.id}", json={"phone": "+250788111222"}, headers=admin_headers)
        return client.get("/api/notifications", headers=auth(user)).json()["data"][0]

    def test_mark_own_notification_read(self, client, admin_headers, employee):
        notification = self._notified(client, admin_headers, employee)
        assert notification["is_read"] is False

        response = client.put(f"/api/notifications/{notification['id']}/read", headers=auth(employee))
        assert response.status_code == 200
        assert response.json()["data"]["is_read"] is True
        assert client.get("/api/notifications/unread", headers=auth(employee)).json()["total"] == 0

    def test_someone_elses_notification_is_not_found(self, client, admin_headers, employee, manager):
        notification = self._notified(client, admin_headers, employee)

        response = client.put(f"/api/notifications/{notification['id']}/read", headers=auth(manager))
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Notification not found"}
        assert client.get("/api/notifications/unread", headers=auth(employee)).json()["total"] == 1

    def test_all_notifications_is_admin_only(self, client, manager_headers, employee_headers):
        assert client.get("/api/notifications/all", headers=manager_headers).status_code == 403
        assert client.get("/api/notifications/all", headers=employee_headers).status_code == 403


class TestSeedAdmin:

    def test_seeds_first_admin(self, client, db):
        assert jobs.main(["seed-admin", "--email", "Owner@Example.com", "--password", "bootstrap1"]) == 0

        seeded = db.query(User).one()
        assert seeded.email == "owner@example.com"
        assert seeded.role == UserRole.ADMIN
        assert seeded.is_active is True
        assert login(client, "owner@example.com", "bootstrap1").status_code == 200

    def test_skipped_once_users_exist(self, admin, db):
        assert jobs.seed_admin("second@example.com", "bootstrap1") is False
        assert [u.email for u in db.query(User).all()] == [admin.email]

    def test_needs_a_password(self, db):
        assert jobs.main(["seed-admin", "--email", "owner@example.com", "--password", ""]) == 1
        assert db.query(User).count() == 0
