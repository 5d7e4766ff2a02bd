import base64
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from backend.app.core.settings import get_settings
from backend.app.core.time import utc_today
from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def invoice_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(get_settings(), "invoice_dir", str(tmp_path))
    return tmp_path


def create_profile(client: TestClient):
    resp = client.put(
        "/profile",
        json={"name": "Max Mustermann", "address": "Musterweg 5", "bank_details": "Ref: {invoice_number}"},
    )
    assert resp.status_code == 200


def create_client(client: TestClient, rate: float = 80.0) -> int:
    resp = client.post("/clients", json={"name": "Acme GmbH", "address": "Hauptstr. 1", "hourly_rate": rate})
    assert resp.status_code == 201
    return resp.json()["id"]


def create_session(client: TestClient, client_id: int, days_ago: int = 3):
    resp = client.post(
        "/sessions",
        json={
            "client_id": client_id,
            "name": "Backend work",
            "date": (utc_today() - timedelta(days=days_ago)).isoformat(),
            "start_time": "09:00",
            "end_time": "12:30",
        },
    )
    assert resp.status_code == 201


def generate(client: TestClient, client_id: int, **overrides):
    today = utc_today()
    payload = {
        "client_id": client_id,
        "start_date": (today - timedelta(days=10)).isoformat(),
        "end_date": today.isoformat(),
    }
    payload.update(overrides)
    return client.post("/invoices/generate", json=payload)


def seed(client: TestClient) -> int:
    create_profile(client)
    client_id = create_client(client)
    create_session(client, client_id)
    return client_id


def test_generate_invoice(invoice_dir):
    client = TestClient(app)
    client_id = seed(client)

    resp = generate(client, client_id, language="en")
    assert resp.status_code == 201
    data = resp.json()
    assert data["invoice_number"] == f"{utc_today().year}-0001"
    pdf_bytes = base64.b64decode(data["pdf_base64"])
    assert pdf_bytes.startswith(b"%PDF")
    assert (invoice_dir / f"invoice_{data['invoice_number']}.pdf").read_bytes() == pdf_bytes

    resp = generate(client, client_id)
    assert resp.json()["invoice_number"] == f"{utc_today().year}-0002"


def test_list_and_get_invoice():
    client = TestClient(app)
    client_id = seed(client)
    invoice_id = generate(client, client_id).json()["invoice_id"]

    resp = client.get("/invoices")
    assert resp.status_code == 200
    rows = resp.json()
    assert len(rows) == 1
    assert rows[0]["client_name"] == "Acme GmbH"
    assert rows[0]["total_amount"] == 280.0
    assert rows[0]["status"] == "created"
    assert rows[0]["paid_date"] is None

    resp = client.get(f"/invoices/{invoice_id}")
    assert resp.status_code == 200
    assert resp.json()["due_date"] == (utc_today() + timedelta(days=30)).isoformat()

    assert client.get("/invoices/999").status_code == 404
    assert client.get("/invoices/0").status_code == 400


def test_generate_invoice_errors():
    client = TestClient(app)
    client_id = create_client(client)
    create_session(client, client_id)

    resp = generate(client, client_id)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "User profile not found - please create a user profile first"

    create_profile(client)
    today = utc_today()
    resp = generate(client, client_id, start_date=today.isoformat(), end_date=(today - timedelta(days=1)).isoformat())
    assert resp.status_code == 400

    resp = generate(client, client_id, start_date=(today - timedelta(days=400)).isoformat())
    assert resp.status_code == 422
    assert resp.json()["detail"] == "Date range cannot exceed 1 year"

    resp = generate(client, client_id, start_date=(today - timedelta(days=2)).isoformat())
    assert resp.status_code == 404
    assert resp.json()["detail"] == "No sessions found in the specified date range"

    resp = generate(client, 0)
    assert resp.status_code == 400

    resp = client.post("/invoices/generate", json={"start_date": today.isoformat()})
    assert resp.status_code == 422

    assert client.get("/invoices").json() == []


def test_update_invoice_status():
    client = TestClient(app)
    client_id = seed(client)
    invoice_id = generate(client, client_id).json()["invoice_id"]

    resp = client.patch(f"/invoices/{invoice_id}/status", json={"status": "paid"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Paid date is required when marking invoice as paid"

    resp = client.patch(f"/invoices/{invoice_id}/status", json={"status": "archived"})
    assert resp.status_code == 400

    resp = client.patch(f"/invoices/{invoice_id}/status", json={"status": "paid", "paid_date": "2025-03-20"})
    assert resp.status_code == 204
    data = client.get(f"/invoices/{invoice_id}").json()
    assert data["status"] == "paid"
    assert data["paid_date"] == "2025-03-20"

    resp = client.patch("/invoices/999/status", json={"status": "sent"})
    assert resp.status_code == 404


def test_download_invoice_pdf(invoice_dir):
    client = TestClient(app)
    client_id = seed(client)
    data = generate(client, client_id).json()

    resp = client.get(f"/invoices/{data['invoice_id']}/pdf")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.headers["content-disposition"] == f'attachment; filename="invoice_{data["invoice_number"]}.pdf"'
    assert resp.content == base64.b64decode(data["pdf_base64"])

    (invoice_dir / f"invoice_{data['invoice_number']}.pdf").unlink()
    resp = client.get(f"/invoices/{data['invoice_id']}/pdf")
    assert resp.status_code == 500
    assert resp.json()["detail"] == "PDF file not found"


def test_delete_invoice(invoice_dir):
    client = TestClient(app)
    client_id = seed(client)
    data = generate(client, client_id).json()

    resp = client.delete(f"/invoices/{data['invoice_id']}")
    assert resp.status_code == 204
    assert not (invoice_dir / f"invoice_{data['invoice_number']}.pdf").exists()
    assert client.get(f"/invoices/{data['invoice_id']}").status_code == 404
    assert len(client.get("/sessions").json()) == 1
