import os

# fresh in-memory database for every TestClient session
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ.setdefault("DEMO_MODE", "true")

import pytest
from fastapi.testclient import TestClient

from app.core.security import create_access_token
from app.main import app


@pytest.fixture
def client():
    """TestClient with the app lifespan running; the schema is created on entry."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    """Build bearer headers for an arbitrary user."""
    def make(user_id="other-user", name="Other User", email="other@example.com"):
        token = create_access_token({"sub": user_id, "name": name, "email": email})
        return {"Authorization": f"Bearer {token}"}
    return make


@pytest.fixture
def group(client):
    """Demo user's group with two extra members (Sam, Jordan)."""
    res = client.post("/api/v1/groups/", json={"name": "Goa Trip"})
    assert res.status_code == 201
    group = res.json()

    for name, email in (("Sam", "sam@example.com"), ("Jordan", "jordan@example.com")):
        r = client.post(f"/api/v1/groups/{group['id']}/members", json={"email": email, "name": name})
        assert r.status_code == 201

    return client.get(f"/api/v1/groups/{group['id']}").json()
