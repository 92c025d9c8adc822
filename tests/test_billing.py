from decimal import Decimal

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


def create_invoice(client: TestClient, token: str, student_id: str, due_date: str, items=None, month="2024-03"):
    payload = {
        "student_id": student_id,
        "billing_month": month,
        "issue_date": "2024-03-01",
        "due_date": due_date,
        "items": items or [{"description": "3월 수강료", "amount": "300000", "item_type": "tuition"}],
    }
    return client.post("/api/invoices", json=payload, headers=auth(token))


def pay(client: TestClient, token: str, invoice_id: str, amount: str):
    return client.post(
        "/api/payments",
        json={"invoice_id": invoice_id, "payment_date": "2024-03-05", "paid_amount": amount, "payment_method": "transfer"},
        headers=auth(token),
    )


def test_invoice_total_subtracts_discounts():
    client = TestClient(app)
    token, tenant_id = register_and_login(client, "b1@example.com")
    student_id = create_student(client, token, tenant_id)
    resp = create_invoice(
        client,
        token,
        student_id,
        "2999-12-31",
        items=[
            {"description": "수강료", "amount": "300000", "item_type": "tuition"},
            {"description": "교재비", "amount": "25000", "item_type": "material"},
            {"description": "형제 할인", "amount": "30000", "item_type": "discount"},
        ],
    )
    assert resp.status_code == 201
    data = resp.json()
    assert Decimal(data["total_amount"]) == Decimal("295000")
    assert data["status"] == "unpaid"
    assert data["days_overdue"] == 0
    assert len(data["items"]) == 3
    assert data["student_name"] == "김민수"


def test_invoice_requires_items_and_valid_month():
    client = TestClient(app)
    token, tenant_id = register_and_login(client, "b2@example.com")
    student_id = create_student(client, token, tenant_id)
    assert create_invoice(client, token, student_id, "2999-12-31", items=[]).status_code == 400
    assert create_invoice(client, token, student_id, "2999-12-31", month="2024-13").status_code == 400
    assert create_invoice(client, token, "missing", "2999-12-31").status_code == 404


def test_payments_move_invoice_through_statuses():
    client = TestClient(app)
    token, tenant_id = register_and_login(client, "b3@example.com")
    student_id = create_student(client, token, tenant_id)
    invoice_id = create_invoice(client, token, student_id, "2999-12-31").json()["id"]

    resp = pay(client, token, invoice_id, "100000")
    assert resp.status_code == 201
    detail = client.get(f"/api/invoices/{invoice_id}", headers=auth(token)).json()
    assert detail["status"] == "partially_paid"
    assert Decimal(detail["remaining_amount"]) == Decimal("200000")
    assert len(detail["payments"]) == 1

    resp = pay(client, token, invoice_id, "250000")
    assert resp.status_code == 409
    assert resp.json()["code"] == "CONFLICT"

    assert pay(client, token, invoice_id, "200000").status_code == 201
    detail = client.get(f"/api/invoices/{invoice_id}", headers=auth(token)).json()
    assert detail["status"] == "paid"
    assert Decimal(detail["remaining_amount"]) == Decimal("0")


def test_payment_amount_must_be_positive():
    client = TestClient(app)
    token, tenant_id = register_and_login(client, "b4@example.com")
    student_id = create_student(client, token, tenant_id)
    invoice_id = create_invoice(client, token, student_id, "2999-12-31").json()["id"]
    assert pay(client, token, invoice_id, "0").status_code == 400


def test_past_due_invoice_is_overdue():
    client = TestClient(app)
    token, tenant_id = register_and_login(client, "b5@example.com")
    student_id = create_student(client, token, tenant_id)
    invoice = create_invoice(client, token, student_id, "2024-03-10").json()
    assert invoice["status"] == "overdue"
    assert invoice["days_overdue"] > 0

    body = client.get("/api/invoices?status=overdue", headers=auth(token)).json()
    assert [i["id"] for i in body["data"]] == [invoice["id"]]


def test_payment_stats():
    client = TestClient(app)
    token, tenant_id = register_and_login(client, "b6@example.com")
    student_id = create_student(client, token, tenant_id)
    paid_id = create_invoice(client, token, student_id, "2999-12-31").json()["id"]
    create_invoice(client, token, student_id, "2024-03-10")
    create_invoice(client, token, student_id, "2999-12-31", month="2024-04")
    pay(client, token, paid_id, "300000")

    stats = client.get("/api/payments/stats?billing_month=2024-03", headers=auth(token)).json()
    assert Decimal(stats["totalBilled"]) == Decimal("600000")
    assert Decimal(stats["totalCollected"]) == Decimal("300000")
    assert Decimal(stats["totalUnpaid"]) == Decimal("300000")
    assert stats["unpaidCount"] == 1
    assert stats["overdueCount"] == 1
    assert stats["collectionRate"] == 50.0

    stats = client.get("/api/payments/stats", headers=auth(token)).json()
    assert Decimal(stats["totalBilled"]) == Decimal("900000")
    assert stats["collectionRate"] == 33.3


def test_invoices_are_tenant_scoped():
    client = TestClient(app)
    token_a, tenant_a = register_and_login(client, "b7a@example.com")
    token_b, _ = register_and_login(client, "b7b@example.com")
    student_id = create_student(client, token_a, tenant_a)
    invoice_id = create_invoice(client, token_a, student_id, "2999-12-31").json()["id"]
    assert client.get(f"/api/invoices/{invoice_id}", headers=auth(token_b)).status_code == 404
    assert client.get("/api/invoices", headers=auth(token_b)).json()["meta"]["total"] == 0
