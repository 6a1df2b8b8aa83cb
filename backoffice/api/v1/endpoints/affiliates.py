"""
Affiliate directory endpoints.
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from backoffice.api.deps import get_db, get_request_id
from backoffice.exceptions import NotFoundError
from backoffice.models.schemas.users import UserRead, AffiliateCodeRead
from backoffice.services import affiliates as affiliate_service
from backoffice.utils import get_logger

router = APIRouter()
logger = get_logger(__name__)

@router.get(
    "/",
    response_model=List[UserRead],
    summary="List affiliates"
)
async def list_affiliates(db: Session = Depends(get_db)) -> List[UserRead]:
    return [UserRead.model_validate(u) for u in affiliate_service.get_all_affiliates(db)]

@router.get(
    "/generate-code",
    response_model=AffiliateCodeRead,
    summary="Generate affiliate code",
    description="Return a code not held by any user. Nothing is reserved."
)
async def generate_code(db: Session = Depends(get_db)) -> AffiliateCodeRead:
    return AffiliateCodeRead(affiliate_code=affiliate_service.generate_unique_affiliate_code(db))

@router.get(
    "/code/{affiliate_code}",
    response_model=UserRead,
    summary="Look up affiliate by code",
    description="Exact, case-sensitive match."
)
async def get_affiliate_by_code(
    affiliate_code: str,
    request_id: str = Depends(get_request_id),
    db: Session = Depends(get_db)
) -> UserRead:
    user = affiliate_service.get_affiliate_by_code(db, affiliate_code)
    if user is None:
        logger.warning("Affiliate code not found", affiliate_code=affiliate_code, request_id=request_id)
        raise NotFoundError("Affiliate not found")
    return UserRead.model_validate(user)
