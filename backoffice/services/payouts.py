"""Payout requests against an affiliate's verified commission balance.

Available balance is

    sum(commission of payment_verified registrations)
  - sum(amount of every payout request, whatever its status)

A request may take the balance to exactly zero but never below it. The
affiliate row is locked (``SELECT ... FOR UPDATE``) for the duration of the
check and insert so two concurrent requests cannot both pass the check.
"""
from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from backoffice.exceptions import BusinessRuleError, NotFoundError
from backoffice.models.db import PayoutRequest, Registration, User
from backoffice.models.db.enums import PayoutStatus, RegistrationStatus, UserRole
from backoffice.models.schemas.payouts import PayoutRequestCreate
from backoffice.services.affiliates import get_affiliate_by_id
from backoffice.services.notifications import NotificationService
from backoffice.utils import get_logger, log_business_event, to_decimal, utc_now

logger = get_logger(__name__)

INSUFFICIENT_BALANCE = "Insufficient verified commission balance"


def available_balance(session: Session, affiliate_id: int) -> Decimal:
    verified = session.query(func.coalesce(func.sum(Registration.commission_amount), 0)).filter(
        Registration.affiliate_id == affiliate_id,
        Registration.status == RegistrationStatus.PAYMENT_VERIFIED,
    ).scalar()
    requested = session.query(func.coalesce(func.sum(PayoutRequest.amount), 0)).filter(
        PayoutRequest.affiliate_id == affiliate_id
    ).scalar()
    return to_decimal(verified) - to_decimal(requested)


def create_payout_request(session: Session, data: PayoutRequestCreate) -> PayoutRequest:
    affiliate = (
        session.query(User)
        .filter(User.id == data.affiliate_id, User.role == UserRole.AFFILIATE)
        .with_for_update()
        .first()
    )
    if affiliate is None:
        logger.warning("Payout request rejected: affiliate not found", affiliate_id=data.affiliate_id)
        raise NotFoundError("Affiliate not found")

    amount = to_decimal(data.amount)
    available = available_balance(session, affiliate.id)
    if amount > available:
        # Release the row lock before reporting
        session.rollback()
        logger.warning(
            "Payout request rejected: insufficient balance",
            affiliate_id=data.affiliate_id,
            requested_amount=amount,
            available_balance=available,
        )
        raise BusinessRuleError(INSUFFICIENT_BALANCE)

    payout = PayoutRequest(
        affiliate_id=affiliate.id,
        amount=amount,
        bank_name=data.bank_name,
        account_number=data.account_number,
        account_holder_name=data.account_holder_name,
        status=PayoutStatus.PENDING,
        requested_at=utc_now(),
        processed_at=None,
    )
    session.add(payout)
    session.commit()
    session.refresh(payout)

    log_business_event(
        event_type="payout_requested",
        details={
            "payout_id": payout.id,
            "amount": amount,
            "balance_after": available - amount,
        },
        user_id=affiliate.id,
    )
    return payout


def update_payout_status(
    session: Session,
    payout_id: int,
    status: PayoutStatus,
    notifier: Optional[NotificationService] = None,
) -> PayoutRequest:
    """Set the payout status.

    ``processed_at`` is stamped the first time the status becomes ``paid``.
    Moving back to ``pending`` leaves it as it was.
    """
    payout = session.get(PayoutRequest, payout_id)
    if payout is None:
        logger.warning("Payout status update failed: not found", payout_id=payout_id)
        raise NotFoundError("Payout request not found")

    previous_status = payout.status
    payout.status = status
    if status == PayoutStatus.PAID and payout.processed_at is None:
        payout.processed_at = utc_now()
    session.flush()
    session.refresh(payout)

    # Notify before commit so a failed notification leaves the status unchanged
    if notifier is not None:
        affiliate = session.get(User, payout.affiliate_id)
        if affiliate is not None:
            notifier.send_payout_status_changed(affiliate.email, payout.amount, payout.status)
    session.commit()

    log_business_event(
        event_type="payout_status_updated",
        details={
            "payout_id": payout.id,
            "previous_status": previous_status.value,
            "new_status": payout.status.value,
            "amount": payout.amount,
        },
        user_id=payout.affiliate_id,
    )
    return payout


def get_payout_requests_by_affiliate(session: Session, affiliate_id: int) -> List[PayoutRequest]:
    if get_affiliate_by_id(session, affiliate_id) is None:
        raise NotFoundError("Affiliate not found")
    return (
        session.query(PayoutRequest)
        .filter(PayoutRequest.affiliate_id == affiliate_id)
        .order_by(PayoutRequest.id)
        .all()
    )


def get_all_payout_requests(session: Session) -> List[PayoutRequest]:
    return session.query(PayoutRequest).order_by(PayoutRequest.id).all()


__all__ = [
    "available_balance",
    "create_payout_request",
    "update_payout_status",
    "get_payout_requests_by_affiliate",
    "get_all_payout_requests",
]
