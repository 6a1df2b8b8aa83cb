"""Registration lifecycle: pending -> payment_verified."""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from backoffice.exceptions import NotFoundError
from backoffice.models.db import Program, Registration, User
from backoffice.models.db.enums import RegistrationStatus, UserRole
from backoffice.models.schemas.registrations import RegistrationCreate
from backoffice.services.commission import commission_for_program
from backoffice.services.notifications import NotificationService
from backoffice.utils import get_logger, log_business_event, utc_now

logger = get_logger(__name__)


def create_registration(
    session: Session,
    data: RegistrationCreate,
    notifier: Optional[NotificationService] = None,
) -> Registration:
    """Record a student sign-up through an affiliate code.

    The commission is computed once from the program as it is now and stored
    on the registration; later program edits do not change it.

    Raises:
        NotFoundError: unknown affiliate code, or program missing / inactive
    """
    affiliate = (
        session.query(User)
        .filter(User.affiliate_code == data.affiliate_code, User.role == UserRole.AFFILIATE)
        .first()
    )
    if affiliate is None:
        logger.warning("Registration rejected: affiliate not found", affiliate_code=data.affiliate_code)
        raise NotFoundError("Affiliate not found")

    # Missing and inactive programs are reported the same way
    program = (
        session.query(Program)
        .filter(Program.id == data.program_id, Program.is_active == True)  # noqa: E712
        .first()
    )
    if program is None:
        logger.warning("Registration rejected: program not found or inactive", program_id=data.program_id)
        raise NotFoundError("Program not found or inactive")

    commission_amount = commission_for_program(program)

    registration = Registration(
        affiliate_id=affiliate.id,
        program_id=program.id,
        student_name=data.student_name,
        student_email=data.student_email,
        student_phone=data.student_phone,
        status=RegistrationStatus.PENDING,
        commission_amount=commission_amount,
    )
    session.add(registration)
    session.flush()
    session.refresh(registration)

    # Notify inside the transaction: a failed notification rolls the registration back
    if notifier is not None:
        notifier.send_new_registration(registration, affiliate, program)
    session.commit()

    log_business_event(
        event_type="registration_created",
        details={
            "registration_id": registration.id,
            "program_id": program.id,
            "commission_amount": commission_amount,
        },
        user_id=affiliate.id,
    )
    return registration


def verify_payment(session: Session, registration_id: int) -> Registration:
    """Mark the registration's payment as verified.

    Re-verifying an already verified registration is accepted and re-stamps
    ``payment_verified_at``.
    """
    registration = session.get(Registration, registration_id)
    if registration is None:
        logger.warning("Payment verification failed: registration not found", registration_id=registration_id)
        raise NotFoundError("Registration not found")

    previous_status = registration.status
    registration.status = RegistrationStatus.PAYMENT_VERIFIED
    registration.payment_verified_at = utc_now()
    session.commit()
    session.refresh(registration)

    log_business_event(
        event_type="payment_verified",
        details={
            "registration_id": registration.id,
            "previous_status": previous_status.value,
            "commission_amount": registration.commission_amount,
        },
        user_id=registration.affiliate_id,
    )
    return registration


def get_all_registrations(session: Session) -> List[Registration]:
    return session.query(Registration).order_by(Registration.id).all()


def get_registrations_by_affiliate(session: Session, affiliate_id: int) -> List[Registration]:
    return (
        session.query(Registration)
        .filter(Registration.affiliate_id == affiliate_id)
        .order_by(Registration.id)
        .all()
    )


__all__ = [
    "create_registration",
    "verify_payment",
    "get_all_registrations",
    "get_registrations_by_affiliate",
]
