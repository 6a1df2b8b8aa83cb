"""
API v1 router initialization and setup.
"""
from fastapi import APIRouter
from .endpoints import auth, programs, registrations, tracking, payouts, affiliates, commission, setup

api_router = APIRouter()

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["auth"]
)

api_router.include_router(
    programs.router,
    prefix="/programs",
    tags=["programs"]
)

api_router.include_router(
    registrations.router,
    prefix="/registrations",
    tags=["registrations"]
)

api_router.include_router(
    tracking.router,
    prefix="/tracking",
    tags=["tracking"]
)

api_router.include_router(
    payouts.router,
    prefix="/payouts",
    tags=["payouts"]
)

api_router.include_router(
    affiliates.router,
    prefix="/affiliates",
    tags=["affiliates"]
)

api_router.include_router(
    commission.router,
    prefix="/commission",
    tags=["commission"]
)

api_router.include_router(
    setup.router,
    prefix="/setup",
    tags=["setup"]
)
