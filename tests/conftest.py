"""
Pytest configuration for the Apparel ERP API tests.

The application is pointed at an in-memory SQLite database before any
project module is imported; tables are recreated for every test.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient

import models  # noqa: F401  registers all tables
from auth import get_password_hash, create_access_token
from database import Base, SessionLocal, engine
from main import app
from models.user import User, UserRole, UserStatus

TEST_PASSWORD = "secret123"


@pytest.fixture(scope="session")
def password_hash():
    """bcrypt is slow; hash the shared test password once."""
    return get_password_hash(TEST_PASSWORD)


@pytest.fixture(autouse=True)
def db_tables():
    """Fresh schema for each test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    # Startup seeding is not run; fixtures create what each test needs
    return TestClient(app)


@pytest.fixture
def make_user(db_session, password_hash):
    """Create a user and return auth headers for it."""
    def _make_user(username, role=UserRole.USER, status=UserStatus.ACTIVE):
        user = User(username=username, password=password_hash, role=role, status=status)
        db_session.add(user)
        db_session.commit()
        token = create_access_token(username, role.value)
        return {"Authorization": f"Bearer {token}"}
    return _make_user


@pytest.fixture
def superadmin_headers(make_user):
    return make_user("root", UserRole.SUPERADMIN)


@pytest.fixture
def admin_headers(make_user):
    return make_user("admin", UserRole.ADMIN)


@pytest.fixture
def user_headers(make_user):
    return make_user("planner", UserRole.USER)


@pytest.fixture
def viewer_headers(make_user):
    return make_user("viewer", UserRole.VIEWER)


@pytest.fixture
def catalog(client, user_headers):
    """One style, one SKU, two materials and a supplier created through the API."""
    def post(path, payload):
        response = client.post(path, json=payload, headers=user_headers)
        assert response.status_code == 201, response.text
        return response.json()

    style = post("/api/styles/", {
        "styleCode": "ST-100", "description": "Crew neck tee", "brand": "Northwind",
        "season": "SS25", "targetCostPrice": "12.50"
    })
    sku = post("/api/skus/", {
        "skuCode": "ST-100-BLK-M", "styleCode": "ST-100", "color": "Black", "size": "M",
        "retailPrice": "29.99"
    })
    fabric = post("/api/materials/", {
        "materialCode": "FAB-001", "description": "Cotton jersey", "category": "Fabric",
        "unitOfMeasure": "Meter", "costPerUnit": "4.00"
    })
    thread = post("/api/materials/", {
        "materialCode": "THR-001", "description": "Polyester thread", "category": "Thread",
        "unitOfMeasure": "Cone", "costPerUnit": "0.50"
    })
    supplier = post("/api/suppliers/", {"supplierName": "Acme Textiles", "email": "sales@acme.test"})
    return {"style": style, "sku": sku, "fabric": fabric, "thread": thread, "supplier": supplier}
