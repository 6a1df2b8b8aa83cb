import os
import secrets
import sys
from decimal import Decimal
from pathlib import Path
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

# Ensure project root on sys.path so 'backoffice' resolves without an install
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Console logging only during tests; must be set before config is imported
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from backoffice.config import PASSWORD_SETTINGS  # noqa: E402
from backoffice.database import Store  # noqa: E402
from backoffice.main import create_app  # noqa: E402
"""Pytest fixtures and factories.

Every test gets a fresh in-memory SQLite store. ``StaticPool`` keeps a single
connection so the test session and the request sessions see the same data.
"""
from backoffice.models.db import (  # noqa: E402
    User, Program, Registration, PayoutRequest,
)
from backoffice.models.db.enums import (  # noqa: E402
    UserRole, ProgramType, CommissionType, RegistrationStatus, PayoutStatus,
)
from backoffice.services.auth import hash_password  # noqa: E402
from backoffice.services.notifications import NotificationService  # noqa: E402
from backoffice.utils import to_decimal, utc_now  # noqa: E402


@pytest.fixture(autouse=True)
def _fast_bcrypt(monkeypatch):
    """Minimum bcrypt cost keeps password hashing fast in tests."""
    monkeypatch.setitem(PASSWORD_SETTINGS, "bcrypt_rounds", 4)


@pytest.fixture()
def store():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    s = Store(engine=engine)
    s.create_all()
    yield s
    s.drop_all()
    s.dispose()


@pytest.fixture()
def db_session(store):
    session = store.session()
    try:
        yield session
    finally:
        session.close()


class RecordingNotifier(NotificationService):
    """Keeps every notification it builds so tests can inspect them."""

    def __init__(self):
        super().__init__(admin_email="admin@test.local")
        self.sent = []

    def _deliver(self, notification, event, **context):
        self.sent.append((event, notification))
        return super()._deliver(notification, event, **context)


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def app(store, notifier):
    return create_app(store=store, notifier=notifier)


@pytest.fixture()
def client(app):
    return TestClient(app)

# ---------- Data factory helpers ----------

@pytest.fixture()
def affiliate_factory(db_session):
    def _create(full_name: str = "Test Affiliate", email: str | None = None, affiliate_code: str | None = None):
        if email is None:
            email = f"aff_{secrets.token_hex(4)}@example.com"
        if affiliate_code is None:
            affiliate_code = f"AFF{secrets.token_hex(3).upper()[:5]}"
        user = User(
            email=email,
            password_hash=hash_password("secret123"),
            full_name=full_name,
            role=UserRole.AFFILIATE,
            affiliate_code=affiliate_code,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _create


@pytest.fixture()
def admin_factory(db_session):
    def _create(email: str | None = None):
        if email is None:
            email = f"admin_{secrets.token_hex(4)}@example.com"
        user = User(
            email=email,
            password_hash=hash_password("secret123"),
            full_name="Test Admin",
            role=UserRole.ADMIN,
            affiliate_code=None,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _create


@pytest.fixture()
def program_factory(db_session):
    def _create(
        name: str | None = None,
        *,
        program_type: ProgramType = ProgramType.ONLINE,
        fee: float | int | str = 1500000,
        commission_rate: float | int | str = 10,
        commission_type: CommissionType = CommissionType.PERCENTAGE,
        is_active: bool = True,
    ):
        program = Program(
            name=name or f"Program {secrets.token_hex(2)}",
            type=program_type,
            fee=to_decimal(fee),
            commission_rate=to_decimal(commission_rate),
            commission_type=commission_type,
            description="Test program",
            is_active=is_active,
        )
        db_session.add(program)
        db_session.commit()
        db_session.refresh(program)
        return program
    return _create


@pytest.fixture()
def registration_factory(db_session):
    """Insert a registration directly with a given commission, bypassing the commission rule."""
    def _create(affiliate, program, *, commission_amount: float | int = 0, verified: bool = False):
        registration = Registration(
            affiliate_id=affiliate.id,
            program_id=program.id,
            student_name="Student",
            student_email=f"student_{secrets.token_hex(3)}@example.com",
            student_phone="+620000000",
            status=RegistrationStatus.PAYMENT_VERIFIED if verified else RegistrationStatus.PENDING,
            commission_amount=to_decimal(commission_amount),
            payment_verified_at=utc_now() if verified else None,
        )
        db_session.add(registration)
        db_session.commit()
        db_session.refresh(registration)
        return registration
    return _create


@pytest.fixture()
def payout_factory(db_session):
    def _create(affiliate, amount: float | int | Decimal, *, status: PayoutStatus = PayoutStatus.PENDING):
        payout = PayoutRequest(
            affiliate_id=affiliate.id,
            amount=to_decimal(amount),
            bank_name="BCA",
            account_number="1234567890",
            account_holder_name=affiliate.full_name,
            status=status,
            requested_at=utc_now(),
        )
        db_session.add(payout)
        db_session.commit()
        db_session.refresh(payout)
        return payout
    return _create
