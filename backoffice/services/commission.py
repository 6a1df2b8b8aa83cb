"""Commission rule.

percentage -> fee * rate / 100
flat       -> rate (fee ignored)

The result never goes below zero (a negative stored rate yields 0) and is
quantized to cents, the precision of ``registrations.commission_amount``.
The same function is used when a registration is created and when a
commission is previewed for a program.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Dict

from sqlalchemy.orm import Session

from backoffice.config import COMMISSION_DEFAULTS
from backoffice.exceptions import InvalidInputError, NotFoundError
from backoffice.models.db import Program
from backoffice.models.db.enums import CommissionType
from backoffice.utils import get_logger
from backoffice.utils.money import Number, ZERO, to_decimal

logger = get_logger(__name__)

_HUNDRED = Decimal(100)


def calculate_commission(fee: Number, rate: Number, commission_type: CommissionType | str) -> Decimal:
    """Compute the commission for one sale.

    Args:
        fee: program fee
        rate: percentage (0-100) or flat amount depending on ``commission_type``
        commission_type: ``percentage`` or ``flat``
    Returns:
        non-negative commission, quantized to 0.01
    """
    fee_dec = Decimal(str(fee))
    rate_dec = Decimal(str(rate))
    kind = CommissionType(commission_type)

    if kind == CommissionType.PERCENTAGE:
        commission = fee_dec * rate_dec / _HUNDRED
    else:
        commission = rate_dec

    return max(ZERO, to_decimal(commission))


def commission_for_program(program: Program) -> Decimal:
    return calculate_commission(program.fee, program.commission_rate, program.commission_type)


def preview_commission(session: Session, program_id: int) -> Decimal:
    """Commission a registration against ``program_id`` would earn right now.

    Inactive programs can be previewed; nothing is written.
    """
    program = session.get(Program, program_id)
    if program is None:
        raise NotFoundError("Program not found")
    return commission_for_program(program)


def get_commission_rate_by_program_type(program_type: str) -> Dict[str, float | str]:
    """Default commission configuration for a program type.

    Raises:
        InvalidInputError: for a type outside ``COMMISSION_DEFAULTS``
    """
    config = COMMISSION_DEFAULTS.get(program_type)
    if config is None:
        logger.warning("Unknown program type requested", program_type=program_type)
        raise InvalidInputError(f"Unknown program type: {program_type}")
    return {"rate": float(config["rate"]), "type": str(config["type"])}


__all__ = [
    "calculate_commission",
    "commission_for_program",
    "preview_commission",
    "get_commission_rate_by_program_type",
]
