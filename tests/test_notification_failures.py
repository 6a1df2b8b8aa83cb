import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from backoffice.main import create_app
from backoffice.models.db import PayoutRequest, Registration, User
from backoffice.models.db.enums import PayoutStatus
from backoffice.services.notifications import NotificationService


class FailingNotifier(NotificationService):
    def _deliver(self, notification, event, **context):
        raise RuntimeError("mail relay unavailable")


@pytest.fixture()
def failing_client(store):
    app = create_app(store=store, notifier=FailingNotifier())
    return TestClient(app, raise_server_exceptions=False)


def test_registration_rolled_back_when_notification_fails(
    failing_client: TestClient, db_session: Session, affiliate_factory, program_factory
):
    affiliate = affiliate_factory()
    program = program_factory()

    r = failing_client.post(
        "/api/v1/registrations/",
        json={
            "affiliate_code": affiliate.affiliate_code,
            "program_id": program.id,
            "student_name": "Budi",
            "student_email": "budi@example.com",
            "student_phone": "+62811",
        },
    )
    assert r.status_code == 500
    assert r.json()["success"] is False

    db_session.expire_all()
    assert db_session.query(Registration).count() == 0


def test_payout_status_unchanged_when_notification_fails(
    failing_client: TestClient, db_session: Session, affiliate_factory, payout_factory
):
    affiliate = affiliate_factory()
    payout = payout_factory(affiliate, 25000)

    r = failing_client.patch(f"/api/v1/payouts/{payout.id}/status", json={"status": "paid"})
    assert r.status_code == 500

    db_session.expire_all()
    row = db_session.get(PayoutRequest, payout.id)
    assert row.status == PayoutStatus.PENDING
    assert row.processed_at is None


def test_user_not_created_when_welcome_fails(failing_client: TestClient, db_session: Session):
    r = failing_client.post(
        "/api/v1/auth/register",
        json={"email": "jane@example.com", "password": "secret123", "full_name": "Jane", "role": "affiliate"},
    )
    assert r.status_code == 500

    db_session.expire_all()
    assert db_session.query(User).filter_by(email="jane@example.com").count() == 0
