from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from backoffice.models.db import Program
from backoffice.models.db.enums import CommissionType


PROGRAM_PAYLOAD = {
    "name": "Online TOEFL",
    "type": "online",
    "fee": 2500000,
    "commission_rate": 10,
    "commission_type": "percentage",
    "description": "TOEFL preparation",
}


def test_create_and_get_program(client: TestClient):
    r = client.post("/api/v1/programs/", json=PROGRAM_PAYLOAD)
    assert r.status_code == 201, r.text
    created = r.json()
    assert created["fee"] == 2500000.0
    assert created["commission_rate"] == 10.0
    assert created["is_active"] is True

    r = client.get(f"/api/v1/programs/{created['id']}")
    assert r.status_code == 200
    assert r.json()["name"] == "Online TOEFL"


def test_create_program_validation(client: TestClient):
    for field, value in [("fee", 0), ("fee", -1), ("commission_rate", 0), ("type", "weekend"), ("commission_type", "tiered")]:
        payload = {**PROGRAM_PAYLOAD, field: value}
        r = client.post("/api/v1/programs/", json=payload)
        assert r.status_code == 422, (field, value)


def test_percentage_rate_capped_at_100(client: TestClient):
    r = client.post("/api/v1/programs/", json={**PROGRAM_PAYLOAD, "commission_rate": 101})
    assert r.status_code == 422
    assert r.json()["success"] is False

    r = client.post("/api/v1/programs/", json={**PROGRAM_PAYLOAD, "commission_rate": 100})
    assert r.status_code == 201

    # Flat rates are amounts, not percentages
    r = client.post(
        "/api/v1/programs/",
        json={**PROGRAM_PAYLOAD, "commission_rate": 100000, "commission_type": "flat"},
    )
    assert r.status_code == 201
    assert r.json()["commission_rate"] == 100000.0


def test_update_rejects_percentage_rate_above_100(client: TestClient, db_session: Session, program_factory):
    program = program_factory(commission_rate=10)
    r = client.put(f"/api/v1/programs/{program.id}", json={"commission_rate": 150})
    assert r.status_code == 400
    assert r.json()["message"] == "Percentage commission rate cannot exceed 100"

    flat = program_factory(commission_rate=100000, commission_type=CommissionType.FLAT)
    r = client.put(f"/api/v1/programs/{flat.id}", json={"commission_type": "percentage"})
    assert r.status_code == 400

    db_session.expire_all()
    assert float(db_session.get(Program, program.id).commission_rate) == 10.0
    assert db_session.get(Program, flat.id).commission_type == CommissionType.FLAT


def test_update_program_partial(client: TestClient, program_factory):
    program = program_factory(name="Easy Peasy", fee=1200000, commission_rate=10)

    r = client.put(f"/api/v1/programs/{program.id}", json={"fee": 1300000})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["fee"] == 1300000.0
    assert body["name"] == "Easy Peasy"
    assert body["commission_rate"] == 10.0


def test_update_unknown_program(client: TestClient):
    r = client.put("/api/v1/programs/999", json={"fee": 100})
    assert r.status_code == 404
    assert r.json()["message"] == "Program not found"


def test_delete_is_soft(client: TestClient, db_session: Session, program_factory):
    keep = program_factory(name="Keep")
    gone = program_factory(name="Gone")

    r = client.delete(f"/api/v1/programs/{gone.id}")
    assert r.status_code == 200
    assert r.json()["success"] is True

    listed = [p["id"] for p in client.get("/api/v1/programs/").json()]
    assert keep.id in listed
    assert gone.id not in listed

    # Still readable by id, and the row still exists
    r = client.get(f"/api/v1/programs/{gone.id}")
    assert r.status_code == 200
    assert r.json()["is_active"] is False
    db_session.expire_all()
    assert db_session.get(Program, gone.id) is not None


def test_delete_and_get_unknown_program(client: TestClient):
    assert client.delete("/api/v1/programs/999").status_code == 404
    assert client.get("/api/v1/programs/999").status_code == 404


def test_commission_preview(client: TestClient, program_factory):
    program = program_factory(fee=1500000, commission_rate=10)
    r = client.get(f"/api/v1/programs/{program.id}/commission")
    assert r.status_code == 200
    assert r.json() == {"program_id": program.id, "commission_type": "percentage", "commission_amount": 150000.0}

    assert client.get("/api/v1/programs/999/commission").status_code == 404


def test_default_commission_rates(client: TestClient):
    r = client.get("/api/v1/commission/rates/rombongan")
    assert r.status_code == 200
    assert r.json() == {"rate": 100000.0, "type": "flat"}

    r = client.get("/api/v1/commission/rates/invalid_type")
    assert r.status_code == 400
    assert r.json()["message"] == "Unknown program type: invalid_type"
