"""Referral link click tracking and per-affiliate statistics."""
from __future__ import annotations

from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from backoffice.exceptions import NotFoundError
from backoffice.models.db import LinkClick, Registration, User
from backoffice.models.db.enums import RegistrationStatus, UserRole
from backoffice.models.schemas.tracking import AffiliateStats, LinkClickCreate
from backoffice.utils import get_logger, log_business_event, to_decimal, to_float

logger = get_logger(__name__)


def track_link_click(session: Session, data: LinkClickCreate) -> LinkClick:
    affiliate = (
        session.query(User)
        .filter(User.affiliate_code == data.affiliate_code, User.role == UserRole.AFFILIATE)
        .first()
    )
    if affiliate is None:
        logger.warning("Click rejected: affiliate not found", affiliate_code=data.affiliate_code)
        raise NotFoundError(f"Affiliate not found with code: {data.affiliate_code}")

    click = LinkClick(
        affiliate_id=affiliate.id,
        ip_address=data.ip_address,
        user_agent=data.user_agent,
    )
    session.add(click)
    session.commit()
    session.refresh(click)

    log_business_event(
        event_type="link_click_tracked",
        details={"click_id": click.id, "ip_address": click.ip_address},
        user_id=affiliate.id,
    )
    return click


def _commission_sum(session: Session, affiliate_id: int, status: RegistrationStatus | None = None):
    query = session.query(func.coalesce(func.sum(Registration.commission_amount), 0)).filter(
        Registration.affiliate_id == affiliate_id
    )
    if status is not None:
        query = query.filter(Registration.status == status)
    return to_decimal(query.scalar())


def get_affiliate_stats(session: Session, affiliate_id: int) -> AffiliateStats:
    """Click/registration counts and commission sums for one affiliate.

    Absent rows are zeros; an unknown affiliate simply has no activity.
    """
    total_clicks = (
        session.query(func.count(LinkClick.id)).filter(LinkClick.affiliate_id == affiliate_id).scalar() or 0
    )
    total_registrations = (
        session.query(func.count(Registration.id)).filter(Registration.affiliate_id == affiliate_id).scalar() or 0
    )

    return AffiliateStats(
        total_clicks=total_clicks,
        total_registrations=total_registrations,
        total_commission=to_float(_commission_sum(session, affiliate_id)),
        pending_commission=to_float(_commission_sum(session, affiliate_id, RegistrationStatus.PENDING)),
        verified_commission=to_float(_commission_sum(session, affiliate_id, RegistrationStatus.PAYMENT_VERIFIED)),
    )


def get_link_clicks_by_affiliate(session: Session, affiliate_id: int) -> List[LinkClick]:
    return (
        session.query(LinkClick)
        .filter(LinkClick.affiliate_id == affiliate_id)
        .order_by(LinkClick.id)
        .all()
    )


__all__ = ["track_link_click", "get_affiliate_stats", "get_link_clicks_by_affiliate"]
