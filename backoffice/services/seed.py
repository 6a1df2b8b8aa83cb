"""Initial data: the English Booster program catalogue and the admin account."""
from __future__ import annotations

import time
from typing import List

from sqlalchemy.orm import Session

from backoffice.config import ADMIN_SEED_SETTINGS
from backoffice.models.db import Program, User
from backoffice.models.db.enums import CommissionType, ProgramType, UserRole
from backoffice.services.auth import hash_password
from backoffice.utils import get_logger, log_business_event, log_performance, to_decimal

logger = get_logger(__name__)

# (name, type, fee, commission_rate, commission_type)
PROGRAM_CATALOGUE = [
    # Online, 10%
    ("Online Kids", ProgramType.ONLINE, 1500000, 10, CommissionType.PERCENTAGE),
    ("Online Teen", ProgramType.ONLINE, 1800000, 10, CommissionType.PERCENTAGE),
    ("Online TOEFL", ProgramType.ONLINE, 2500000, 10, CommissionType.PERCENTAGE),
    ("Easy Peasy", ProgramType.ONLINE, 1200000, 10, CommissionType.PERCENTAGE),
    ("Private Online", ProgramType.ONLINE, 3000000, 10, CommissionType.PERCENTAGE),
    ("General English", ProgramType.ONLINE, 1600000, 10, CommissionType.PERCENTAGE),
    ("Speaking Booster", ProgramType.ONLINE, 1400000, 10, CommissionType.PERCENTAGE),
    ("Grammar Booster", ProgramType.ONLINE, 1300000, 10, CommissionType.PERCENTAGE),
    # Offline Pare, 7%
    ("Pare 2 Minggu", ProgramType.OFFLINE_PARE, 2000000, 7, CommissionType.PERCENTAGE),
    ("Pare 1 Bulan", ProgramType.OFFLINE_PARE, 3500000, 7, CommissionType.PERCENTAGE),
    ("Pare 2 Bulan", ProgramType.OFFLINE_PARE, 6500000, 7, CommissionType.PERCENTAGE),
    ("Pare 3 Bulan", ProgramType.OFFLINE_PARE, 9000000, 7, CommissionType.PERCENTAGE),
    ("Pare TOEFL", ProgramType.OFFLINE_PARE, 4000000, 7, CommissionType.PERCENTAGE),
    ("RPL (Rekognisi Pembelajaran Lampau)", ProgramType.OFFLINE_PARE, 5000000, 7, CommissionType.PERCENTAGE),
    ("Kapal Pesiar", ProgramType.OFFLINE_PARE, 12000000, 7, CommissionType.PERCENTAGE),
    # Rombongan, flat Rp100.000
    ("English Trip", ProgramType.ROMBONGAN, 2500000, 100000, CommissionType.FLAT),
    ("Special English Day", ProgramType.ROMBONGAN, 500000, 100000, CommissionType.FLAT),
    ("Tutor Visit", ProgramType.ROMBONGAN, 1500000, 100000, CommissionType.FLAT),
]

# Cabang, 5%: the same four levels in each branch city
_CABANG_LEVELS = [
    ("Cilukba (TK / Pre-school)", 800000),
    ("Hompimpa (SD)", 900000),
    ("Hip Hip Hurray (SMP)", 1000000),
    ("Insight Out (SMA)", 1200000),
]
PROGRAM_CATALOGUE += [
    (f"{level} - {city}", ProgramType.CABANG, fee, 5, CommissionType.PERCENTAGE)
    for city in ("Malang", "Sidoarjo", "Nganjuk")
    for level, fee in _CABANG_LEVELS
]


def seed_programs(session: Session) -> List[Program]:
    """Insert catalogue programs whose name is not taken yet.

    Returns only the programs created by this call, so a second run returns
    an empty list.
    """
    start = time.time()
    existing = {name for (name,) in session.query(Program.name).all()}

    created = []
    for name, program_type, fee, rate, commission_type in PROGRAM_CATALOGUE:
        if name in existing:
            continue
        program = Program(
            name=name,
            type=program_type,
            fee=to_decimal(fee),
            commission_rate=to_decimal(rate),
            commission_type=commission_type,
            description=f"{name} program offered by English Booster",
            is_active=True,
        )
        session.add(program)
        created.append(program)

    session.commit()
    for program in created:
        session.refresh(program)

    log_business_event(
        event_type="programs_seeded",
        details={"created": len(created), "skipped": len(PROGRAM_CATALOGUE) - len(created)},
    )
    log_performance("seed_programs", (time.time() - start) * 1000, {"created": len(created)})
    return created


def create_admin_user(session: Session) -> User:
    """Return the configured admin, creating it on first call."""
    email = ADMIN_SEED_SETTINGS["email"]
    admin = session.query(User).filter(User.email == email).first()
    if admin is not None:
        logger.info("Admin user already exists", user_id=admin.id)
        return admin

    admin = User(
        email=email,
        password_hash=hash_password(ADMIN_SEED_SETTINGS["password"]),
        full_name=ADMIN_SEED_SETTINGS["full_name"],
        role=UserRole.ADMIN,
        affiliate_code=None,
    )
    session.add(admin)
    session.commit()
    session.refresh(admin)

    log_business_event(event_type="admin_seeded", details={"email": admin.email}, user_id=admin.id)
    return admin


__all__ = ["PROGRAM_CATALOGUE", "seed_programs", "create_admin_user"]
