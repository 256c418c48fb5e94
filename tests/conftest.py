"""Pytest configuration and fixtures."""

import os

# Point the app at the test database before galley.config caches its settings
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from galley.database import Base, Database, get_db  # noqa: E402
from galley.main import app  # noqa: E402

test_database = Database(TEST_DATABASE_URL)


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in TEST_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(TEST_DATABASE_URL):
            create_database(TEST_DATABASE_URL)

    test_database.create_all()
    yield
    test_database.dispose()


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = test_database.session()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, email: str, name: str = "Test User") -> AuthHeaders:
    """Register a user and return bearer headers for them."""
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": "testpass123", "name": name},
    )
    assert response.status_code == 201
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['access_token']}"},
        user_id=data["user"]["id"],
        email=email,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register(client, "test@example.com")


@pytest.fixture
def other_headers(client):
    """A second, unrelated user."""
    return register(client, "other@example.com", name="Other User")


@pytest.fixture
def make_inventory(client):
    """Create inventory items through the API."""

    def _make(headers, **fields) -> dict:
        payload = {"category": "FOOD", "quantity": 0, "unit": "pcs"} | fields
        response = client.post("/api/inventory", headers=headers, json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_meal(client):
    """Create meals with ingredients through the API."""

    def _make(headers, name: str, ingredients: list[dict]) -> dict:
        response = client.post(
            "/api/meals", headers=headers, json={"name": name, "ingredients": ingredients}
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_list(client):
    """Create empty provisioning lists through the API."""

    def _make(headers, name: str = "Trip") -> dict:
        response = client.post("/api/provisioning-lists", headers=headers, json={"name": name})
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def add_list_item(client):
    """Add lines to lists through the API."""

    def _add(headers, list_id: int, **fields) -> dict:
        payload = {"category": "FOOD", "quantity": 1, "unit": "pcs"} | fields
        response = client.post(
            f"/api/provisioning-lists/{list_id}/items", headers=headers, json=payload
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _add
