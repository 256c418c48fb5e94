"""API endpoint tests."""

from galley.config import get_settings
from galley.models.inventory import InventoryItem
from galley.models.provisioning import ProvisioningList
from galley.services.seed_user import DEMO_INVENTORY, DEMO_LISTS


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_register_user(client):
    """Test user registration."""
    response = client.post(
        "/api/auth/register",
        json={"email": "newuser@example.com", "password": "password123", "name": "New User"},
    )
    assert response.status_code == 201
    data = response.json()
    assert "access_token" in data
    assert data["user"]["email"] == "newuser@example.com"
    assert data["user"]["has_seen_onboarding"] is False


def test_register_does_not_seed_by_default(client, db, auth_headers):
    """New accounts start empty unless demo seeding is switched on."""
    user_id = auth_headers.user_id
    assert db.query(InventoryItem).filter(InventoryItem.user_id == user_id).count() == 0
    assert db.query(ProvisioningList).filter(ProvisioningList.user_id == user_id).count() == 0


def test_register_duplicate_email(client, auth_headers):
    """Test registration with duplicate email fails."""
    response = client.post(
        "/api/auth/register",
        json={"email": auth_headers.email, "password": "password123", "name": "Duplicate"},
    )
    assert response.status_code == 400
    assert "already registered" in response.json()["detail"]


def test_register_short_password(client):
    """Passwords under eight characters are rejected."""
    response = client.post(
        "/api/auth/register",
        json={"email": "short@example.com", "password": "abc", "name": "Short"},
    )
    assert response.status_code == 422


def test_login(client, auth_headers):
    """Test user login."""
    response = client.post(
        "/api/auth/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    assert response.status_code == 200
    assert "access_token" in response.json()


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post(
        "/api/auth/login", json={"email": auth_headers.email, "password": "wrongpass"}
    )
    assert response.status_code == 401


def test_get_current_user(client, auth_headers):
    """Test getting current user info."""
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["email"] == auth_headers.email


def test_requests_without_token_are_rejected(client):
    """Protected routes need a bearer token."""
    assert client.get("/api/inventory").status_code in (401, 403)


def test_invalid_token_rejected(client):
    """A garbage token is a 401."""
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_onboarding_seen(client, auth_headers):
    """Dismissing the guide sticks to the account."""
    response = client.post("/api/auth/onboarding-seen", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"ok": True}

    me = client.get("/api/auth/me", headers=auth_headers).json()
    assert me["has_seen_onboarding"] is True


def test_clear_seed_data(client, auth_headers, other_headers, make_inventory, make_list, make_meal):
    """Clearing removes inventory and lists but keeps meals and other users' data."""
    make_inventory(auth_headers, name="Rice", quantity=2, unit="kg")
    make_list(auth_headers, name="Trip")
    make_meal(
        auth_headers,
        "Risotto",
        [{"name": "Rice", "category": "FOOD", "quantity": 1, "unit": "kg"}],
    )
    make_inventory(other_headers, name="Rice", quantity=5, unit="kg")

    response = client.post("/api/auth/clear-seed-data", headers=auth_headers)
    assert response.status_code == 200

    assert client.get("/api/inventory", headers=auth_headers).json()["total"] == 0
    assert client.get("/api/provisioning-lists", headers=auth_headers).json() == []
    assert len(client.get("/api/meals", headers=auth_headers).json()) == 1
    assert client.get("/api/inventory", headers=other_headers).json()["total"] == 1


def test_logout(client, auth_headers):
    """Logout just acknowledges; the client drops the token."""
    response = client.post("/api/auth/logout", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["ok"] is True


def test_register_seeds_demo_data_when_enabled(client, monkeypatch):
    """With seeding on, a new account starts with demo inventory and lists."""
    monkeypatch.setattr(get_settings(), "seed_new_users", True)
    response = client.post(
        "/api/auth/register",
        json={"email": "seeded@example.com", "password": "password123", "name": "Seeded"},
    )
    headers = {"Authorization": f"Bearer {response.json()['access_token']}"}

    assert client.get("/api/inventory", headers=headers).json()["total"] == len(DEMO_INVENTORY)
    assert len(client.get("/api/provisioning-lists", headers=headers).json()) == len(DEMO_LISTS)
