import time

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from backoffice.models.db import Program, Registration
from backoffice.models.db.enums import CommissionType, ProgramType, RegistrationStatus


def _payload(affiliate_code: str, program_id: int, **overrides):
    payload = {
        "affiliate_code": affiliate_code,
        "program_id": program_id,
        "student_name": "Budi Santoso",
        "student_email": "budi@example.com",
        "student_phone": "+628123456789",
    }
    payload.update(overrides)
    return payload


def test_create_registration_computes_commission(client: TestClient, affiliate_factory, program_factory, notifier):
    affiliate = affiliate_factory()
    program = program_factory(fee=1500000, commission_rate=10)

    r = client.post("/api/v1/registrations/", json=_payload(affiliate.affiliate_code, program.id))
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["affiliate_id"] == affiliate.id
    assert body["status"] == "pending"
    assert body["commission_amount"] == 150000.0
    assert body["payment_verified_at"] is None

    assert [event for event, _ in notifier.sent] == ["new_registration"]
    assert notifier.sent[0][1].recipient == "admin@test.local"


def test_flat_commission_registration(client: TestClient, affiliate_factory, program_factory):
    affiliate = affiliate_factory()
    program = program_factory(
        program_type=ProgramType.ROMBONGAN,
        fee=2500000,
        commission_rate=100000,
        commission_type=CommissionType.FLAT,
    )
    r = client.post("/api/v1/registrations/", json=_payload(affiliate.affiliate_code, program.id))
    assert r.status_code == 201
    assert r.json()["commission_amount"] == 100000.0


def test_unknown_affiliate_code(client: TestClient, program_factory, notifier):
    program = program_factory()
    r = client.post("/api/v1/registrations/", json=_payload("AFFNOPE1", program.id))
    assert r.status_code == 404
    assert r.json()["message"] == "Affiliate not found"
    assert notifier.sent == []


def test_inactive_and_missing_program_same_error(client: TestClient, affiliate_factory, program_factory):
    affiliate = affiliate_factory()
    inactive = program_factory(is_active=False)

    inactive_r = client.post("/api/v1/registrations/", json=_payload(affiliate.affiliate_code, inactive.id))
    missing_r = client.post("/api/v1/registrations/", json=_payload(affiliate.affiliate_code, 9999))
    assert inactive_r.status_code == missing_r.status_code == 404
    assert inactive_r.json()["message"] == missing_r.json()["message"] == "Program not found or inactive"


def test_invalid_student_email(client: TestClient, affiliate_factory, program_factory):
    affiliate = affiliate_factory()
    program = program_factory()
    r = client.post(
        "/api/v1/registrations/",
        json=_payload(affiliate.affiliate_code, program.id, student_email="nope"),
    )
    assert r.status_code == 422


def test_commission_is_fixed_at_registration(client: TestClient, db_session: Session, affiliate_factory, program_factory):
    affiliate = affiliate_factory()
    program = program_factory(fee=1000000, commission_rate=10)
    r = client.post("/api/v1/registrations/", json=_payload(affiliate.affiliate_code, program.id))
    registration_id = r.json()["id"]

    client.put(f"/api/v1/programs/{program.id}", json={"commission_rate": 50})

    db_session.expire_all()
    assert float(db_session.get(Registration, registration_id).commission_amount) == 100000.0
    assert float(db_session.get(Program, program.id).commission_rate) == 50.0


def test_verify_payment(client: TestClient, db_session: Session, affiliate_factory, program_factory, registration_factory):
    affiliate = affiliate_factory()
    program = program_factory()
    registration = registration_factory(affiliate, program, commission_amount=150000)

    r = client.post(f"/api/v1/registrations/{registration.id}/verify-payment")
    assert r.status_code == 200, r.text
    first = r.json()
    assert first["status"] == "payment_verified"
    assert first["payment_verified_at"] is not None

    db_session.expire_all()
    row = db_session.get(Registration, registration.id)
    first_verified_at = row.payment_verified_at
    assert first_verified_at >= row.registration_date

    time.sleep(0.01)

    # Verifying again is accepted and re-stamps the timestamp
    r = client.post(f"/api/v1/registrations/{registration.id}/verify-payment")
    assert r.status_code == 200
    assert r.json()["status"] == "payment_verified"

    db_session.expire_all()
    row = db_session.get(Registration, registration.id)
    assert row.payment_verified_at > first_verified_at
    assert row.payment_verified_at >= row.registration_date


def test_verify_unknown_registration(client: TestClient):
    r = client.post("/api/v1/registrations/999/verify-payment")
    assert r.status_code == 404
    assert r.json()["message"] == "Registration not found"


def test_listings(client: TestClient, affiliate_factory, program_factory, registration_factory):
    a1 = affiliate_factory()
    a2 = affiliate_factory()
    program = program_factory()
    registration_factory(a1, program)
    registration_factory(a1, program)
    registration_factory(a2, program, verified=True)

    assert len(client.get("/api/v1/registrations/").json()) == 3
    mine = client.get(f"/api/v1/registrations/affiliate/{a1.id}").json()
    assert len(mine) == 2
    assert {r["affiliate_id"] for r in mine} == {a1.id}
    assert client.get("/api/v1/registrations/affiliate/9999").json() == []
    statuses = {r["status"] for r in client.get(f"/api/v1/registrations/affiliate/{a2.id}").json()}
    assert statuses == {RegistrationStatus.PAYMENT_VERIFIED.value}
