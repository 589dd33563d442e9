"""Pytest configuration and fixtures.

The app is pointed at an in-memory SQLite database and a temporary upload
directory before anything imports it; tables are rebuilt for every test.
"""
import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="landlordpro-uploads-")

from datetime import date, timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from database import SessionLocal, engine  # noqa: E402
from dependencies import create_access_token, hash_password  # noqa: E402
from main import app  # noqa: E402
from models import Base, User, UserRole  # noqa: E402

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def tables():
    """Fresh schema for each test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def make_user(email: str, role: UserRole, full_name: str = None, is_active: bool = True) -> User:
    """Insert a user directly, without the welcome notification."""
    with SessionLocal() as session:
        user = User(
            email=email,
            full_name=full_name or email.split("@")[0].title(),
            password_hash=hash_password(PASSWORD),
            role=role,
            is_active=is_active,
        )
        session.add(user)
        session.commit()
        return user


def auth(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def admin() -> User:
    return make_user("admin@landlordpro.rw", UserRole.ADMIN, "Alice Admin")


@pytest.fixture
def manager() -> User:
    return make_user("manager@landlordpro.rw", UserRole.MANAGER, "Mark Manager")


@pytest.fixture
def employee() -> User:
    return make_user("employee@landlordpro.rw", UserRole.EMPLOYEE, "Eve Employee")


@pytest.fixture
def admin_headers(admin) -> dict:
    return auth(admin)


@pytest.fixture
def manager_headers(manager) -> dict:
    return auth(manager)


@pytest.fixture
def employee_headers(employee) -> dict:
    return auth(employee)


# Factories going through the API, so every record is built the way clients build it

def create_property(client, headers, **overrides) -> dict:
    body = {"name": "Sunset Apartments", "location": "Kigali", "number_of_floors": 3, "has_basement": True}
    body.update(overrides)
    response = client.post("/api/properties", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def property_floors(client, headers, property_id: int) -> list:
    response = client.get(f"/api/properties/{property_id}/floors", headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["data"]


def create_local(client, headers, property_id: int, floor_id: int, **overrides) -> dict:
    body = {"reference_code": "A-101", "property_id": property_id, "floor_id": floor_id}
    body.update(overrides)
    response = client.post("/api/locals", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_tenant(client, headers, **overrides) -> dict:
    body = {"name": "John Doe", "company_name": "Acme Ltd"}
    body.update(overrides)
    response = client.post("/api/tenants", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_lease(client, headers, local_id: int, tenant_id: int, start: date = None, end: date = None, **overrides) -> dict:
    start = start or date.today() - timedelta(days=30)
    end = end or date.today() + timedelta(days=335)
    body = {
        "startDate": start.isoformat(),
        "endDate": end.isoformat(),
        "leaseAmount": 1200,
        "localId": local_id,
        "tenantId": tenant_id,
    }
    body.update(overrides)
    response = client.post("/api/leases", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_payment_mode(client, headers, **overrides) -> dict:
    body = {"code": "BANK", "displayName": "Bank transfer", "requiresProof": True}
    body.update(overrides)
    response = client.post("/api/payment-modes", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def rented_local(client, admin_headers) -> dict:
    """A property with one local on its ground floor and a tenant."""
    prop = create_property(client, admin_headers)
    ground = next(f for f in property_floors(client, admin_headers, prop["id"]) if f["level_number"] == 0)
    local = create_local(client, admin_headers, prop["id"], ground["id"])
    tenant = create_tenant(client, admin_headers)
    return {"property": prop, "floor": ground, "local": local, "tenant": tenant}
