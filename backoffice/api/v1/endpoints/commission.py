"""
Default commission lookup per program type.
"""
from fastapi import APIRouter
from backoffice.models.schemas.programs import CommissionRateRead
from backoffice.services.commission import get_commission_rate_by_program_type

router = APIRouter()

@router.get(
    "/rates/{program_type}",
    response_model=CommissionRateRead,
    summary="Default commission for a program type",
    description="Unknown program types are rejected with 400."
)
async def get_default_rate(program_type: str) -> CommissionRateRead:
    return CommissionRateRead(**get_commission_rate_by_program_type(program_type))
