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


def register_and_login(client: TestClient, email: str, password: str = "secret1") -> tuple[str, str]:
    client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "name": "Owner", "academy_name": f"Academy {email}"},
    )
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    token = resp.json()["access_token"]
    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    return token, me.json()["tenant_id"]


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_student(client: TestClient, token: str, tenant_id: str, name: str = "김민수") -> str:
    resp = client.post("/api/students", json={"tenant_id": tenant_id, "name": name}, headers=auth(token))
    assert resp.status_code == 201
    return resp.json()["id"]


def create_class(client: TestClient, token: str, name: str, capacity: int) -> str:
    resp = client.post("/api/classes", json={"name": name, "max_capacity": capacity}, headers=auth(token))
    assert resp.status_code == 201
    return resp.json()["id"]


def test_new_class_is_under_enrolled():
    client = TestClient(app)
    token, _ = register_and_login(client, "c1@example.com")
    resp = client.post(
        "/api/classes",
        json={"name": "초등 영어", "subject": "English", "teacher_name": "Ms. Park", "max_capacity": 4},
        headers=auth(token),
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["current_enrollment"] == 0
    assert data["capacity_status"] == "under_enrolled"
    assert data["status"] == "active"


def test_class_capacity_must_be_positive():
    client = TestClient(app)
    token, _ = register_and_login(client, "c2@example.com")
    resp = client.post("/api/classes", json={"name": "Empty", "max_capacity": 0}, headers=auth(token))
    assert resp.status_code == 400


def test_enrollment_fills_class_and_rejects_overflow():
    client = TestClient(app)
    token, tenant_id = register_and_login(client, "c3@example.com")
    class_id = create_class(client, token, "Small", 2)
    first = create_student(client, token, tenant_id, "Student A")
    second = create_student(client, token, tenant_id, "Student B")
    third = create_student(client, token, tenant_id, "Student C")

    resp = client.post(f"/api/classes/{class_id}/enrollments", json={"student_id": first}, headers=auth(token))
    assert resp.status_code == 201
    assert resp.json()["capacity_status"] == "normal"

    resp = client.post(f"/api/classes/{class_id}/enrollments", json={"student_id": first}, headers=auth(token))
    assert resp.status_code == 409

    resp = client.post(f"/api/classes/{class_id}/enrollments", json={"student_id": second}, headers=auth(token))
    assert resp.json()["capacity_status"] == "full"

    resp = client.post(f"/api/classes/{class_id}/enrollments", json={"student_id": third}, headers=auth(token))
    assert resp.status_code == 409
    assert resp.json()["error"] == "Class is full"

    resp = client.delete(f"/api/classes/{class_id}/enrollments/{second}", headers=auth(token))
    assert resp.status_code == 200
    assert resp.json()["current_enrollment"] == 1


def test_list_classes_filters_by_derived_status():
    client = TestClient(app)
    token, tenant_id = register_and_login(client, "c4@example.com")
    full_id = create_class(client, token, "A Full", 1)
    create_class(client, token, "B Empty", 10)
    student_id = create_student(client, token, tenant_id)
    client.post(f"/api/classes/{full_id}/enrollments", json={"student_id": student_id}, headers=auth(token))

    body = client.get("/api/classes", headers=auth(token)).json()
    assert [c["name"] for c in body["data"]] == ["A Full", "B Empty"]
    assert body["meta"]["total"] == 2

    body = client.get("/api/classes?status=full", headers=auth(token)).json()
    assert [c["name"] for c in body["data"]] == ["A Full"]

    body = client.get("/api/classes?page=2&limit=1", headers=auth(token)).json()
    assert [c["name"] for c in body["data"]] == ["B Empty"]
    assert body["meta"]["hasPrev"] is True

    assert client.get("/api/classes?status=crowded", headers=auth(token)).status_code == 400
