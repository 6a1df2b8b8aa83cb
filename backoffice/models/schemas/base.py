"""
Base schemas used across the application.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Any, Dict
from pydantic import BaseModel, Field, ConfigDict

from backoffice.utils.money import to_float


def money_as_float(value: Any) -> Any:
    """``field_validator(mode="before")`` hook: Decimal column values -> float."""
    if isinstance(value, (Decimal, int, float, str)) and not isinstance(value, bool):
        return to_float(value)
    return value


class ResponseBase(BaseModel):
    """Base response envelope for endpoints without a dedicated read schema."""
    success: bool = True
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    data: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)
