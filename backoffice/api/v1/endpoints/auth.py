"""
Account registration and login endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from backoffice.api.deps import get_db, get_notifier, get_request_id
from backoffice.models.schemas.users import UserCreate, LoginRequest, UserRead
from backoffice.services import auth as auth_service
from backoffice.services.notifications import NotificationService
from backoffice.utils import get_logger

router = APIRouter()
logger = get_logger(__name__)

@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register user",
    description="Create an affiliate or admin account. Affiliates receive a generated affiliate code."
)
async def register(
    user_data: UserCreate,
    request_id: str = Depends(get_request_id),
    notifier: NotificationService = Depends(get_notifier),
    db: Session = Depends(get_db)
) -> UserRead:
    logger.info(
        "User registration started",
        email=user_data.email,
        user_role=user_data.role.value,
        request_id=request_id
    )

    user = auth_service.register_user(db, user_data, notifier=notifier)

    logger.info(
        "User registered successfully",
        user_id=user.id,
        affiliate_code=user.affiliate_code,
        request_id=request_id
    )
    return UserRead.model_validate(user)

@router.post(
    "/login",
    response_model=UserRead,
    summary="Login",
    description="Validate credentials and return the account."
)
async def login(
    credentials: LoginRequest,
    request_id: str = Depends(get_request_id),
    db: Session = Depends(get_db)
) -> UserRead:
    user = auth_service.login_user(db, credentials)
    logger.info("Login succeeded", user_id=user.id, request_id=request_id)
    return UserRead.model_validate(user)
