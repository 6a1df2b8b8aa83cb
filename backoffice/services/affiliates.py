"""Affiliate directory and affiliate code generation."""
from __future__ import annotations

import secrets
import string
from typing import List, Optional

from sqlalchemy.orm import Session

from backoffice.config import AFFILIATE_CODE_SETTINGS
from backoffice.models.db import User
from backoffice.models.db.enums import UserRole
from backoffice.utils import get_logger
from backoffice.utils.time import epoch_millis

logger = get_logger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits


def _random_suffix(length: int) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def _code_exists(session: Session, code: str) -> bool:
    return session.query(User.id).filter(User.affiliate_code == code).first() is not None


def generate_unique_affiliate_code(session: Session) -> str:
    """Generate an affiliate code not held by any user.

    Candidates are ``<prefix><suffix>`` with a random uppercase alphanumeric
    suffix. After ``max_attempts`` collisions the code falls back to the prefix
    plus the trailing digits of the current epoch milliseconds; that fallback
    is not re-checked (the unique constraint on ``users.affiliate_code`` is the
    final guard).
    """
    prefix = str(AFFILIATE_CODE_SETTINGS["prefix"])
    suffix_length = int(AFFILIATE_CODE_SETTINGS["suffix_length"])
    max_attempts = int(AFFILIATE_CODE_SETTINGS["max_attempts"])

    for attempt in range(1, max_attempts + 1):
        code = f"{prefix}{_random_suffix(suffix_length)}"
        if not _code_exists(session, code):
            logger.debug("Affiliate code generated", affiliate_code=code, attempt=attempt)
            return code
        logger.debug("Affiliate code collision", affiliate_code=code, attempt=attempt)

    fallback_digits = int(AFFILIATE_CODE_SETTINGS["fallback_digits"])
    code = f"{prefix}{str(epoch_millis())[-fallback_digits:]}"
    logger.warning(
        "Affiliate code generation exhausted attempts; using timestamp fallback",
        affiliate_code=code,
        max_attempts=max_attempts,
    )
    return code


def get_affiliate_by_code(session: Session, affiliate_code: str) -> Optional[User]:
    """Exact, case-sensitive lookup. Empty codes never match."""
    if not affiliate_code:
        return None
    return session.query(User).filter(User.affiliate_code == affiliate_code).first()


def get_affiliate_by_id(session: Session, affiliate_id: int) -> Optional[User]:
    """User with the given id *and* the affiliate role (admins are not affiliates)."""
    return (
        session.query(User)
        .filter(User.id == affiliate_id, User.role == UserRole.AFFILIATE)
        .first()
    )


def get_all_affiliates(session: Session) -> List[User]:
    return session.query(User).filter(User.role == UserRole.AFFILIATE).order_by(User.id).all()


__all__ = [
    "generate_unique_affiliate_code",
    "get_affiliate_by_code",
    "get_affiliate_by_id",
    "get_all_affiliates",
]
