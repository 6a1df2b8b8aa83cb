"""
Program catalogue endpoints.
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import time
from backoffice.api.deps import get_db, get_request_id
from backoffice.exceptions import NotFoundError
from backoffice.models.schemas.base import ResponseBase
from backoffice.models.schemas.programs import ProgramCreate, ProgramUpdate, ProgramRead, CommissionPreview
from backoffice.services import programs as program_service
from backoffice.services.commission import preview_commission
from backoffice.utils import get_logger, log_performance

router = APIRouter()
logger = get_logger(__name__)

@router.post(
    "/",
    response_model=ProgramRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create program"
)
async def create_program(
    program_data: ProgramCreate,
    request_id: str = Depends(get_request_id),
    db: Session = Depends(get_db)
) -> ProgramRead:
    """Create a new program with its commission configuration."""
    start_time = time.time()

    logger.info(
        "Program creation started",
        program_name=program_data.name,
        program_type=program_data.type.value,
        request_id=request_id
    )

    program = program_service.create_program(db, program_data)

    duration_ms = (time.time() - start_time) * 1000
    log_performance(
        operation="create_program",
        duration_ms=duration_ms,
        additional_data={"program_id": program.id}
    )
    return ProgramRead.model_validate(program)

@router.get(
    "/",
    response_model=List[ProgramRead],
    summary="List active programs"
)
async def list_programs(db: Session = Depends(get_db)) -> List[ProgramRead]:
    return [ProgramRead.model_validate(p) for p in program_service.get_programs(db)]

@router.get(
    "/{program_id}",
    response_model=ProgramRead,
    summary="Get program",
    description="Fetch a program by ID, including inactive programs."
)
async def get_program(
    program_id: int,
    request_id: str = Depends(get_request_id),
    db: Session = Depends(get_db)
) -> ProgramRead:
    program = program_service.get_program_by_id(db, program_id)
    if program is None:
        logger.warning("Program not found", program_id=program_id, request_id=request_id)
        raise NotFoundError("Program not found")
    return ProgramRead.model_validate(program)

@router.put(
    "/{program_id}",
    response_model=ProgramRead,
    summary="Update program",
    description="Partial update: only the fields present in the body are changed."
)
async def update_program(
    program_id: int,
    program_update: ProgramUpdate,
    request_id: str = Depends(get_request_id),
    db: Session = Depends(get_db)
) -> ProgramRead:
    logger.info(
        "Program update started",
        program_id=program_id,
        fields=sorted(program_update.model_dump(exclude_unset=True)),
        request_id=request_id
    )
    program = program_service.update_program(db, program_id, program_update)
    return ProgramRead.model_validate(program)

@router.delete(
    "/{program_id}",
    response_model=ResponseBase,
    summary="Deactivate program",
    description="Soft delete: the program is marked inactive and stays readable by ID."
)
async def delete_program(
    program_id: int,
    request_id: str = Depends(get_request_id),
    db: Session = Depends(get_db)
) -> ResponseBase:
    program_service.delete_program(db, program_id)
    logger.info("Program deactivated", program_id=program_id, request_id=request_id)
    return ResponseBase(
        success=True,
        message=f"Program {program_id} deactivated",
        data={"program_id": program_id, "is_active": False}
    )

@router.get(
    "/{program_id}/commission",
    response_model=CommissionPreview,
    summary="Preview commission",
    description="Commission a registration for this program would earn with the current configuration."
)
async def get_commission_preview(
    program_id: int,
    db: Session = Depends(get_db)
) -> CommissionPreview:
    amount = preview_commission(db, program_id)
    program = program_service.get_program_by_id(db, program_id)
    return CommissionPreview(
        program_id=program_id,
        commission_type=program.commission_type,
        commission_amount=float(amount)
    )
