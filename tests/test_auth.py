import pytest
from fastapi.testclient import TestClient

from hagwon.app.db.base import Base
from hagwon.app.db.session import engine
from hagwon.app.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def register(client: TestClient, email: str, password: str = "secret1"):
    return client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "name": "원장님", "academy_name": "Sunrise Academy"},
    )


def test_register_creates_tenant_admin():
    client = TestClient(app)
    resp = register(client, "owner@example.com")
    assert resp.status_code == 201
    data = resp.json()
    assert data["email"] == "owner@example.com"
    assert data["role"] == "admin"
    assert data["tenant_id"]
    assert "hashed_password" not in data


def test_register_duplicate_email_conflicts():
    client = TestClient(app)
    register(client, "dup@example.com")
    resp = register(client, "dup@example.com")
    assert resp.status_code == 409
    assert resp.json() == {"error": "Email already registered", "code": "CONFLICT"}


def test_register_short_password_is_validation_error():
    client = TestClient(app)
    resp = register(client, "short@example.com", password="123")
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Validation failed"
    assert body["code"] == "VALIDATION_ERROR"
    assert any(detail["loc"][-1] == "password" for detail in body["details"])


def test_login_and_me():
    client = TestClient(app)
    register(client, "me@example.com")
    resp = client.post("/api/auth/login", json={"email": "me@example.com", "password": "secret1"})
    assert resp.status_code == 200
    token = resp.json()["access_token"]
    assert resp.json()["token_type"] == "bearer"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "me@example.com"
    assert me.json()["last_login"] is not None


def test_login_wrong_password_unauthorized():
    client = TestClient(app)
    register(client, "wrong@example.com")
    resp = client.post("/api/auth/login", json={"email": "wrong@example.com", "password": "nope-nope"})
    assert resp.status_code == 401
    assert resp.json()["code"] == "UNAUTHORIZED"


def test_me_requires_token():
    client = TestClient(app)
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized", "code": "UNAUTHORIZED"}

    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer invalid.token.value"})
    assert resp.status_code == 401
