"""
Referral link tracking and affiliate statistics endpoints.
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from backoffice.api.deps import get_db, get_request_id
from backoffice.models.schemas.tracking import LinkClickCreate, LinkClickRead, AffiliateStats
from backoffice.services import tracking as tracking_service
from backoffice.utils import get_logger

router = APIRouter()
logger = get_logger(__name__)

@router.post(
    "/clicks",
    response_model=LinkClickRead,
    status_code=status.HTTP_201_CREATED,
    summary="Track link click"
)
async def track_click(
    click_data: LinkClickCreate,
    request_id: str = Depends(get_request_id),
    db: Session = Depends(get_db)
) -> LinkClickRead:
    click = tracking_service.track_link_click(db, click_data)
    logger.debug(
        "Link click tracked",
        click_id=click.id,
        affiliate_id=click.affiliate_id,
        request_id=request_id
    )
    return LinkClickRead.model_validate(click)

@router.get(
    "/affiliates/{affiliate_id}/stats",
    response_model=AffiliateStats,
    summary="Affiliate statistics",
    description="Click and registration counts plus total, pending and verified commission. Zeros when there is no activity."
)
async def affiliate_stats(
    affiliate_id: int,
    db: Session = Depends(get_db)
) -> AffiliateStats:
    return tracking_service.get_affiliate_stats(db, affiliate_id)

@router.get(
    "/affiliates/{affiliate_id}/clicks",
    response_model=List[LinkClickRead],
    summary="List clicks for an affiliate"
)
async def affiliate_clicks(
    affiliate_id: int,
    db: Session = Depends(get_db)
) -> List[LinkClickRead]:
    return [LinkClickRead.model_validate(c) for c in tracking_service.get_link_clicks_by_affiliate(db, affiliate_id)]
