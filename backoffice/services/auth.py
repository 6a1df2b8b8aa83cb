"""User registration and login."""
from __future__ import annotations

from typing import Optional

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backoffice.config import PASSWORD_SETTINGS
from backoffice.exceptions import AuthenticationError, ConflictError
from backoffice.models.db import User
from backoffice.models.db.enums import UserRole
from backoffice.models.schemas.users import UserCreate, LoginRequest
from backoffice.services.affiliates import generate_unique_affiliate_code
from backoffice.services.notifications import NotificationService
from backoffice.utils import get_logger, log_business_event

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def hash_password(password: str) -> str:
    """bcrypt hash, returned as text for the ``password_hash`` column."""
    salt = bcrypt.gensalt(rounds=PASSWORD_SETTINGS["bcrypt_rounds"])
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def register_user(
    session: Session,
    data: UserCreate,
    notifier: Optional[NotificationService] = None,
) -> User:
    """Create an affiliate or admin account.

    Affiliates receive a freshly generated affiliate code; admins never get one.

    Raises:
        ConflictError: the email (or, in the rare fallback case, the code) is taken
    """
    existing = session.query(User.id).filter(User.email == data.email).first()
    if existing:
        logger.warning("User registration failed: duplicate email", email=data.email)
        raise ConflictError("Email already exists")

    affiliate_code = None
    if data.role == UserRole.AFFILIATE:
        affiliate_code = generate_unique_affiliate_code(session)

    user = User(
        email=data.email,
        password_hash=hash_password(data.password),
        full_name=data.full_name,
        role=data.role,
        affiliate_code=affiliate_code,
    )
    session.add(user)
    try:
        session.flush()
    except IntegrityError as e:
        session.rollback()
        logger.error("User registration failed: integrity error", email=data.email, error=str(e))
        raise ConflictError("Email or affiliate code already exists") from e
    session.refresh(user)

    # Welcome goes out before commit; if it fails the account is rolled back
    if notifier is not None:
        notifier.send_welcome(user.email, user.affiliate_code)
    session.commit()

    log_business_event(
        event_type="user_registered",
        details={"user_role": user.role.value, "affiliate_code": user.affiliate_code},
        user_id=user.id,
    )
    return user


def login_user(session: Session, data: LoginRequest) -> User:
    """Return the user for valid credentials.

    Unknown email and wrong password produce the same error.
    """
    user = session.query(User).filter(User.email == data.email).first()
    if user is None or not verify_password(data.password, user.password_hash):
        logger.warning("Login failed", email=data.email)
        raise AuthenticationError(INVALID_CREDENTIALS)

    logger.info("User logged in", user_id=user.id, user_role=user.role.value)
    return user


__all__ = ["hash_password", "verify_password", "register_user", "login_user"]
