from .enums import UserRole, ProgramType, CommissionType, RegistrationStatus, PayoutStatus
from .users import User
from .programs import Program
from .registrations import Registration
from .link_clicks import LinkClick
from .payout_requests import PayoutRequest

__all__ = [
    "User",
    "Program",
    "Registration",
    "LinkClick",
    "PayoutRequest",
    "UserRole",
    "ProgramType",
    "CommissionType",
    "RegistrationStatus",
    "PayoutStatus",
]
