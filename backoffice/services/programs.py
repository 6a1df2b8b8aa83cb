"""Program catalogue operations. Deletion is a soft transition to inactive."""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from backoffice.exceptions import InvalidInputError, NotFoundError
from backoffice.models.db import Program
from backoffice.models.db.enums import CommissionType
from backoffice.models.schemas.programs import MAX_PERCENTAGE_RATE, ProgramCreate, ProgramUpdate
from backoffice.utils import get_logger, log_business_event, to_decimal

logger = get_logger(__name__)

_MONEY_FIELDS = ("fee", "commission_rate")


def create_program(session: Session, data: ProgramCreate) -> Program:
    program = Program(
        name=data.name,
        type=data.type,
        fee=to_decimal(data.fee),
        commission_rate=to_decimal(data.commission_rate),
        commission_type=data.commission_type,
        description=data.description or None,
        is_active=data.is_active,
    )
    session.add(program)
    session.commit()
    session.refresh(program)

    log_business_event(
        event_type="program_created",
        details={
            "program_id": program.id,
            "program_name": program.name,
            "program_type": program.type.value,
            "commission_type": program.commission_type.value,
        },
    )
    return program


def update_program(session: Session, program_id: int, data: ProgramUpdate) -> Program:
    """Apply the fields set on ``data``; untouched fields keep their values."""
    program = session.get(Program, program_id)
    if program is None:
        logger.warning("Program update failed: not found", program_id=program_id)
        raise NotFoundError("Program not found")

    # Explicit nulls only apply to the nullable description
    changes = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field == "description"
    }
    for field, value in changes.items():
        if field in _MONEY_FIELDS:
            value = to_decimal(value)
        setattr(program, field, value)

    # Checked on the merged row since either field may arrive alone
    if program.commission_type == CommissionType.PERCENTAGE and program.commission_rate > MAX_PERCENTAGE_RATE:
        logger.warning(
            "Program update rejected: percentage rate above 100",
            program_id=program_id,
            commission_rate=program.commission_rate,
        )
        session.rollback()
        raise InvalidInputError("Percentage commission rate cannot exceed 100")

    session.commit()
    session.refresh(program)

    log_business_event(
        event_type="program_updated",
        details={"program_id": program.id, "fields": sorted(changes)},
    )
    return program


def delete_program(session: Session, program_id: int) -> None:
    """Soft delete. Existing registrations keep referencing the program."""
    program = session.get(Program, program_id)
    if program is None:
        logger.warning("Program deletion failed: not found", program_id=program_id)
        raise NotFoundError("Program not found")

    program.is_active = False
    session.commit()

    log_business_event(
        event_type="program_deactivated",
        details={"program_id": program_id, "program_name": program.name},
    )


def get_programs(session: Session) -> List[Program]:
    """Active programs only."""
    return session.query(Program).filter(Program.is_active == True).order_by(Program.id).all()  # noqa: E712


def get_program_by_id(session: Session, program_id: int) -> Optional[Program]:
    """Any program, including inactive ones."""
    return session.get(Program, program_id)


__all__ = ["create_program", "update_program", "delete_program", "get_programs", "get_program_by_id"]
