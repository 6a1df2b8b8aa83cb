"""
Dependencies for database sessions and the notification service.

Both are owned by the application instance (``app.state``); nothing is
imported from a module-level global so each app built by ``create_app`` is
isolated.
"""
from typing import Generator
from fastapi import Request
from sqlalchemy.orm import Session
from backoffice.database import Store
from backoffice.exceptions import BackofficeError
from backoffice.services.notifications import NotificationService
from backoffice.utils import get_logger

logger = get_logger(__name__)

def get_store(request: Request) -> Store:
    return request.app.state.store

def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency.
    One session per request; rolled back on error and always closed.

    Yields:
        Session: SQLAlchemy database session
    """
    db = get_store(request).session()
    try:
        yield db
    except BackofficeError:
        db.rollback()
        raise
    except Exception as e:
        logger.error("Database session error", error=str(e), exc_info=True)
        db.rollback()
        raise
    finally:
        db.close()

def get_notifier(request: Request) -> NotificationService:
    return request.app.state.notifier

def get_request_id(request: Request) -> str:
    """Request ID assigned by the request context middleware."""
    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID", "unknown")
