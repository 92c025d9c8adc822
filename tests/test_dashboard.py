import pytest
from fastapi.testclient import TestClient

from hagwon.app.core.time import utc_today
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


WIDGETS = [
    {"id": "stats-grid", "title": "통계", "visible": True, "order": 0, "column": "left"},
    {"id": "quick-actions", "title": "빠른 실행", "visible": False, "order": 0, "column": "right"},
]


def test_preferences_null_until_saved():
    client = TestClient(app)
    token, _ = register_and_login(client, "d1@example.com")
    resp = client.get("/api/dashboard/preferences", headers=auth(token))
    assert resp.status_code == 200
    assert resp.json() == {"preferences": None}


def test_default_preferences_layout():
    client = TestClient(app)
    token, _ = register_and_login(client, "d2@example.com")
    body = client.get("/api/dashboard/preferences/defaults", headers=auth(token)).json()
    assert len(body["widgets"]) == 8
    left = [w["id"] for w in body["widgets"] if w["column"] == "left"]
    assert left == ["today-tasks", "today-communications", "recent-students"]
    assert body["layout"] == "default"


def test_save_and_read_preferences():
    client = TestClient(app)
    token, _ = register_and_login(client, "d3@example.com")
    resp = client.post(
        "/api/dashboard/preferences",
        json={"preferences": {"widgets": WIDGETS, "layout": "compact"}},
        headers=auth(token),
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["preferences"]["layout"] == "compact"

    stored = client.get("/api/dashboard/preferences", headers=auth(token)).json()["preferences"]
    assert stored["widgets"] == WIDGETS
    assert stored["layout"] == "compact"


def test_save_preferences_keeps_other_keys():
    from hagwon.app.db.session import SessionLocal
    from hagwon.app.models.user import User

    client = TestClient(app)
    token, _ = register_and_login(client, "d4@example.com")
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == "d4@example.com").first()
        user.preferences = {"theme": "dark"}
        db.commit()
    finally:
        db.close()

    client.post("/api/dashboard/preferences", json={"preferences": {"widgets": WIDGETS}}, headers=auth(token))

    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == "d4@example.com").first()
        assert user.preferences["theme"] == "dark"
        assert user.preferences["dashboard"]["widgets"] == WIDGETS
    finally:
        db.close()


def test_save_preferences_validation():
    client = TestClient(app)
    token, _ = register_and_login(client, "d5@example.com")
    resp = client.post("/api/dashboard/preferences", json={}, headers=auth(token))
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid preferences data", "code": "VALIDATION_ERROR"}

    bad_widget = dict(WIDGETS[0], column="middle")
    resp = client.post("/api/dashboard/preferences", json={"preferences": {"widgets": [bad_widget]}}, headers=auth(token))
    assert resp.status_code == 400

    resp = client.post(
        "/api/dashboard/preferences", json={"preferences": {"widgets": WIDGETS, "layout": "huge"}}, headers=auth(token)
    )
    assert resp.status_code == 400


def test_preferences_require_auth():
    client = TestClient(app)
    assert client.get("/api/dashboard/preferences").status_code == 401
    assert client.post("/api/dashboard/preferences", json={"preferences": {"widgets": WIDGETS}}).status_code == 401


def test_dashboard_stats_for_period():
    client = TestClient(app)
    token, tenant_id = register_and_login(client, "d6@example.com")
    create_student(client, token, tenant_id, "Student A")
    create_student(client, token, tenant_id, "Student B")
    client.post("/api/classes", json={"name": "Math", "max_capacity": 10}, headers=auth(token))
    client.post("/api/classes", json={"name": "Closed", "max_capacity": 10, "status": "inactive"}, headers=auth(token))

    resp = client.get(
        "/api/dashboard/stats?period_start=2000-01-01&period_end=2999-12-31", headers=auth(token)
    )
    assert resp.status_code == 200
    stats = resp.json()
    assert stats["totalStudents"] == 2
    assert stats["activeClasses"] == 1
    assert stats["averageAttendanceRate"] == 0
    assert stats["growthRate"] == 100
    assert stats["growthTrend"] == "growing"
    assert stats["periodStart"] == "2000-01-01"


def test_dashboard_student_growth_series():
    client = TestClient(app)
    token, tenant_id = register_and_login(client, "d6b@example.com")
    create_student(client, token, tenant_id, "Student A")
    create_student(client, token, tenant_id, "Student B")
    today = utc_today()

    resp = client.get(
        f"/api/dashboard/growth?period_start={today.replace(day=1).isoformat()}&period_end={today.isoformat()}",
        headers=auth(token),
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["periodEnd"] == today.isoformat()
    assert body["points"] == [{"month": today.strftime("%Y-%m"), "students": 2}]

    body = client.get(
        "/api/dashboard/growth?period_start=2000-01-15&period_end=2000-03-01", headers=auth(token)
    ).json()
    assert body["points"] == [
        {"month": "2000-01", "students": 0},
        {"month": "2000-02", "students": 0},
        {"month": "2000-03", "students": 0},
    ]


def test_dashboard_student_growth_validation():
    client = TestClient(app)
    token, _ = register_and_login(client, "d6c@example.com")
    resp = client.get("/api/dashboard/growth?period_end=2024-01-31", headers=auth(token))
    assert resp.status_code == 400
    assert resp.json() == {"error": "periodStart is required", "code": "VALIDATION_ERROR"}
    assert client.get("/api/dashboard/growth?period_start=2024-01-01&period_end=2024-01-31").status_code == 401


def test_dashboard_stats_validation():
    client = TestClient(app)
    token, _ = register_and_login(client, "d7@example.com")
    resp = client.get("/api/dashboard/stats?period_start=2024-02-01&period_end=2024-01-01", headers=auth(token))
    assert resp.status_code == 400
    assert resp.json() == {"error": "periodStart must be before periodEnd", "code": "VALIDATION_ERROR"}

    resp = client.get("/api/dashboard/stats?period_end=2024-01-01", headers=auth(token))
    assert resp.json()["error"] == "periodStart is required"
