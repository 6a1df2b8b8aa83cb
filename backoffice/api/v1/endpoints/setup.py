"""
Initial data setup endpoints. Both operations are safe to repeat.
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from backoffice.api.deps import get_db, get_request_id
from backoffice.models.schemas.programs import ProgramRead
from backoffice.models.schemas.users import UserRead
from backoffice.services import seed as seed_service
from backoffice.utils import get_logger

router = APIRouter()
logger = get_logger(__name__)

@router.post(
    "/seed-programs",
    response_model=List[ProgramRead],
    summary="Seed program catalogue",
    description="Insert the standard program catalogue. Returns only programs created by this call."
)
async def seed_programs(
    request_id: str = Depends(get_request_id),
    db: Session = Depends(get_db)
) -> List[ProgramRead]:
    created = seed_service.seed_programs(db)
    logger.info("Program seed completed", created=len(created), request_id=request_id)
    return [ProgramRead.model_validate(p) for p in created]

@router.post(
    "/admin",
    response_model=UserRead,
    summary="Seed admin account",
    description="Create the configured admin account, or return it if it already exists."
)
async def seed_admin(db: Session = Depends(get_db)) -> UserRead:
    return UserRead.model_validate(seed_service.create_admin_user(db))
