"""
Student registration endpoints.
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import time
from backoffice.api.deps import get_db, get_notifier, get_request_id
from backoffice.models.schemas.registrations import RegistrationCreate, RegistrationRead
from backoffice.services import registrations as registration_service
from backoffice.services.notifications import NotificationService
from backoffice.utils import get_logger, log_performance

router = APIRouter()
logger = get_logger(__name__)

@router.post(
    "/",
    response_model=RegistrationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create registration",
    description="Register a student through an affiliate code. The commission is fixed at this point."
)
async def create_registration(
    registration_data: RegistrationCreate,
    request_id: str = Depends(get_request_id),
    notifier: NotificationService = Depends(get_notifier),
    db: Session = Depends(get_db)
) -> RegistrationRead:
    start_time = time.time()

    logger.info(
        "Registration started",
        affiliate_code=registration_data.affiliate_code,
        program_id=registration_data.program_id,
        request_id=request_id
    )

    registration = registration_service.create_registration(db, registration_data, notifier=notifier)

    duration_ms = (time.time() - start_time) * 1000
    log_performance(
        operation="create_registration",
        duration_ms=duration_ms,
        additional_data={"registration_id": registration.id}
    )
    logger.info(
        "Registration created",
        registration_id=registration.id,
        commission_amount=registration.commission_amount,
        duration_ms=duration_ms,
        request_id=request_id
    )
    return RegistrationRead.model_validate(registration)

@router.post(
    "/{registration_id}/verify-payment",
    response_model=RegistrationRead,
    summary="Verify payment",
    description="Mark the registration as paid; its commission becomes part of the affiliate's payable balance."
)
async def verify_payment(
    registration_id: int,
    request_id: str = Depends(get_request_id),
    db: Session = Depends(get_db)
) -> RegistrationRead:
    registration = registration_service.verify_payment(db, registration_id)
    logger.info("Payment verified", registration_id=registration_id, request_id=request_id)
    return RegistrationRead.model_validate(registration)

@router.get(
    "/",
    response_model=List[RegistrationRead],
    summary="List registrations"
)
async def list_registrations(db: Session = Depends(get_db)) -> List[RegistrationRead]:
    return [RegistrationRead.model_validate(r) for r in registration_service.get_all_registrations(db)]

@router.get(
    "/affiliate/{affiliate_id}",
    response_model=List[RegistrationRead],
    summary="List registrations for an affiliate"
)
async def list_affiliate_registrations(
    affiliate_id: int,
    db: Session = Depends(get_db)
) -> List[RegistrationRead]:
    registrations = registration_service.get_registrations_by_affiliate(db, affiliate_id)
    return [RegistrationRead.model_validate(r) for r in registrations]
