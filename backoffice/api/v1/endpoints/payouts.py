"""
Payout request endpoints.
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import time
from backoffice.api.deps import get_db, get_notifier, get_request_id
from backoffice.models.schemas.payouts import PayoutRequestCreate, PayoutStatusUpdate, PayoutRequestRead
from backoffice.services import payouts as payout_service
from backoffice.services.notifications import NotificationService
from backoffice.utils import get_logger, log_performance

router = APIRouter()
logger = get_logger(__name__)

@router.post(
    "/",
    response_model=PayoutRequestRead,
    status_code=status.HTTP_201_CREATED,
    summary="Request payout",
    description="""
    Request a payout of verified commission.

    Available balance = verified commission - every payout already requested
    (pending or paid). Requests above the available balance are rejected with 400.
    """
)
async def create_payout_request(
    payout_data: PayoutRequestCreate,
    request_id: str = Depends(get_request_id),
    db: Session = Depends(get_db)
) -> PayoutRequestRead:
    start_time = time.time()

    logger.info(
        "Payout request started",
        affiliate_id=payout_data.affiliate_id,
        amount=payout_data.amount,
        request_id=request_id
    )

    payout = payout_service.create_payout_request(db, payout_data)

    duration_ms = (time.time() - start_time) * 1000
    log_performance(
        operation="create_payout_request",
        duration_ms=duration_ms,
        additional_data={"payout_id": payout.id}
    )
    logger.info(
        "Payout request created",
        payout_id=payout.id,
        duration_ms=duration_ms,
        request_id=request_id
    )
    return PayoutRequestRead.model_validate(payout)

@router.patch(
    "/{payout_id}/status",
    response_model=PayoutRequestRead,
    summary="Update payout status"
)
async def update_payout_status(
    payout_id: int,
    status_update: PayoutStatusUpdate,
    request_id: str = Depends(get_request_id),
    notifier: NotificationService = Depends(get_notifier),
    db: Session = Depends(get_db)
) -> PayoutRequestRead:
    payout = payout_service.update_payout_status(db, payout_id, status_update.status, notifier=notifier)
    logger.info(
        "Payout status updated",
        payout_id=payout_id,
        new_status=payout.status.value,
        request_id=request_id
    )
    return PayoutRequestRead.model_validate(payout)

@router.get(
    "/affiliate/{affiliate_id}",
    response_model=List[PayoutRequestRead],
    summary="List payout requests for an affiliate"
)
async def list_affiliate_payouts(
    affiliate_id: int,
    db: Session = Depends(get_db)
) -> List[PayoutRequestRead]:
    payouts = payout_service.get_payout_requests_by_affiliate(db, affiliate_id)
    return [PayoutRequestRead.model_validate(p) for p in payouts]

@router.get(
    "/",
    response_model=List[PayoutRequestRead],
    summary="List payout requests"
)
async def list_payouts(db: Session = Depends(get_db)) -> List[PayoutRequestRead]:
    return [PayoutRequestRead.model_validate(p) for p in payout_service.get_all_payout_requests(db)]
