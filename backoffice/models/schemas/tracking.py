"""
Pydantic schemas for link click tracking and affiliate statistics.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

class LinkClickCreate(BaseModel):
    affiliate_code: str
    ip_address: str = Field(min_length=1, max_length=64)
    user_agent: Optional[str] = None

class LinkClickRead(BaseModel):
    id: int
    affiliate_id: int
    ip_address: str
    user_agent: Optional[str]
    clicked_at: datetime

    model_config = ConfigDict(from_attributes=True)

class AffiliateStats(BaseModel):
    """Aggregates for one affiliate; every field is zero when there is no activity."""
    total_clicks: int = 0
    total_registrations: int = 0
    total_commission: float = 0.0
    pending_commission: float = 0.0
    verified_commission: float = 0.0
