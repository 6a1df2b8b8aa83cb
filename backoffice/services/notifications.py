"""Notification stub.

Formats the three outbound messages the back office produces and writes them
to the structured log. There is no delivery, queueing or retry: a failure while
building or logging a message propagates to the operation that triggered it.

Events:
* new registration   -> admin mailbox
* payout status      -> affiliate
* welcome            -> new affiliate (skipped for users without a code)
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from backoffice.config import NOTIFICATION_SETTINGS
from backoffice.models.db import Program, Registration, User
from backoffice.models.db.enums import CommissionType, PayoutStatus, RegistrationStatus
from backoffice.utils import get_logger
from backoffice.utils.money import Number, format_idr
from backoffice.utils.time import utc_now

logger = get_logger(__name__)


@dataclass(frozen=True)
class Notification:
    recipient: str
    subject: str
    body: str


def _format_date(moment: Optional[datetime]) -> str:
    return (moment or utc_now()).strftime("%d %B %Y %H:%M")


def affiliate_link(affiliate_code: str) -> str:
    return f"{NOTIFICATION_SETTINGS['affiliate_link_base']}?ref={affiliate_code}"


class NotificationService:
    """Builds and logs notifications. One instance lives on ``app.state.notifier``."""

    def __init__(self, admin_email: str | None = None, sender_name: str | None = None):
        self.admin_email = admin_email or NOTIFICATION_SETTINGS["admin_email"]
        self.sender_name = sender_name or NOTIFICATION_SETTINGS["sender_name"]

    def _deliver(self, notification: Notification, event: str, **context) -> Notification:
        logger.info(
            "Notification dispatched",
            notification_event=event,
            recipient=notification.recipient,
            subject=notification.subject,
            body=notification.body,
            **context,
        )
        return notification

    def send_new_registration(self, registration: Registration, affiliate: User, program: Program) -> Notification:
        if registration.status == RegistrationStatus.PENDING:
            status_label = "Awaiting payment verification"
        else:
            status_label = "Payment verified"
        if program.commission_type == CommissionType.PERCENTAGE:
            commission_label = f"Percentage ({program.commission_rate}%)"
        else:
            commission_label = f"Flat ({format_idr(program.commission_rate)})"

        subject = f"New registration - {program.name} via affiliate {affiliate.full_name}"
        body = "\n".join([
            "Hello Admin,",
            "",
            "A new registration came in through the affiliate system:",
            "",
            "REGISTRATION",
            f"- Registration ID: #{registration.id}",
            f"- Student name: {registration.student_name}",
            f"- Student email: {registration.student_email}",
            f"- Student phone: {registration.student_phone}",
            f"- Registered at: {_format_date(registration.registration_date)}",
            f"- Status: {status_label}",
            "",
            "PROGRAM",
            f"- Program: {program.name}",
            f"- Type: {program.type.value}",
            f"- Fee: {format_idr(program.fee)}",
            f"- Description: {program.description or 'No description'}",
            "",
            "AFFILIATE",
            f"- Name: {affiliate.full_name}",
            f"- Email: {affiliate.email}",
            f"- Affiliate code: {affiliate.affiliate_code}",
            f"- Commission earned: {format_idr(registration.commission_amount)}",
            f"- Commission type: {commission_label}",
            "",
            "Please verify the payment as soon as possible.",
            "",
            f"{self.sender_name}",
        ])
        return self._deliver(
            Notification(self.admin_email, subject, body),
            "new_registration",
            registration_id=registration.id,
        )

    def send_payout_status_changed(self, affiliate_email: str, amount: Number, status: PayoutStatus | str) -> Notification:
        payout_status = PayoutStatus(status)
        amount_label = format_idr(amount)
        if payout_status == PayoutStatus.PAID:
            status_label = "PROCESSED"
            closing = [
                "Your payout has been processed.",
                "The funds will arrive in your registered bank account shortly.",
            ]
        else:
            status_label = "IN PROGRESS"
            closing = [
                "Your payout is being processed.",
                "Our team will complete the request shortly.",
            ]

        subject = f"Payout status update - {amount_label}"
        body = "\n".join([
            "Hello Affiliate Partner,",
            "",
            "The status of your payout request has been updated:",
            "",
            f"- Amount: {amount_label}",
            f"- Status: {status_label}",
            f"- Updated at: {_format_date(None)}",
            "",
            *closing,
            "",
            "If you have any questions, please contact our support team.",
            "",
            f"{self.sender_name}",
        ])
        return self._deliver(
            Notification(affiliate_email, subject, body),
            "payout_status_changed",
            payout_status=payout_status.value,
        )

    def send_welcome(self, user_email: str, affiliate_code: Optional[str]) -> Optional[Notification]:
        if not affiliate_code:
            logger.info("Skipping welcome notification: no affiliate code", recipient=user_email)
            return None

        link = affiliate_link(affiliate_code)
        subject = "Welcome to our Affiliate Program!"
        body = "\n".join([
            "Welcome to the Affiliate Program!",
            "",
            "YOUR AFFILIATE LINK:",
            link,
            "",
            "YOUR AFFILIATE CODE:",
            affiliate_code,
            "",
            "GETTING STARTED:",
            "1. Share your affiliate link with friends, family and your network",
            "2. Every registration through your link earns a commission",
            "3. Track clicks and commission from your dashboard",
            "4. Request a payout once your verified balance allows it",
            "",
            f"{self.sender_name}",
        ])
        return self._deliver(
            Notification(user_email, subject, body),
            "welcome",
            affiliate_code=affiliate_code,
        )


__all__ = ["Notification", "NotificationService", "affiliate_link"]
