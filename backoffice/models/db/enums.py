"""Central Enum definitions for core domain states.

Values are the lowercase strings callers send and receive, and the names the
database enum types store.
"""
from __future__ import annotations
import enum


class UserRole(str, enum.Enum):
    AFFILIATE = "affiliate"
    ADMIN = "admin"


class ProgramType(str, enum.Enum):
    ONLINE = "online"
    OFFLINE_PARE = "offline_pare"
    ROMBONGAN = "rombongan"
    CABANG = "cabang"


class CommissionType(str, enum.Enum):
    PERCENTAGE = "percentage"
    FLAT = "flat"


class RegistrationStatus(str, enum.Enum):
    PENDING = "pending"
    PAYMENT_VERIFIED = "payment_verified"


class PayoutStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"


__all__ = [
    "enum_values",
    "UserRole",
    "ProgramType",
    "CommissionType",
    "RegistrationStatus",
    "PayoutStatus",
]


def enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    """Persist enum *values* (not member names) in SQLAlchemy ``Enum`` columns."""
    return [member.value for member in enum_cls]
