from .base import ResponseBase
from .users import UserCreate, LoginRequest, UserRead, AffiliateCodeRead
from .programs import ProgramCreate, ProgramUpdate, ProgramRead, CommissionPreview, CommissionRateRead
from .registrations import RegistrationCreate, RegistrationRead
from .tracking import LinkClickCreate, LinkClickRead, AffiliateStats
from .payouts import PayoutRequestCreate, PayoutStatusUpdate, PayoutRequestRead

__all__ = [
    # Base
    "ResponseBase",

    # Users
    "UserCreate",
    "LoginRequest",
    "UserRead",
    "AffiliateCodeRead",

    # Programs / commission
    "ProgramCreate",
    "ProgramUpdate",
    "ProgramRead",
    "CommissionPreview",
    "CommissionRateRead",

    # Registrations
    "RegistrationCreate",
    "RegistrationRead",

    # Tracking
    "LinkClickCreate",
    "LinkClickRead",
    "AffiliateStats",

    # Payouts
    "PayoutRequestCreate",
    "PayoutStatusUpdate",
    "PayoutRequestRead",
]
