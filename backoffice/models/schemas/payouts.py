"""
Pydantic schemas for payout requests.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator
from ..db.enums import PayoutStatus
from .base import money_as_float

class PayoutRequestCreate(BaseModel):
    affiliate_id: int
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    bank_name: str = Field(min_length=1, max_length=100)
    account_number: str = Field(min_length=1, max_length=50)
    account_holder_name: str = Field(min_length=1, max_length=200)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "affiliate_id": 7,
            "amount": 250000,
            "bank_name": "BCA",
            "account_number": "1234567890",
            "account_holder_name": "Jane Smith"
        }
    })

class PayoutStatusUpdate(BaseModel):
    status: PayoutStatus

class PayoutRequestRead(BaseModel):
    id: int
    affiliate_id: int
    amount: float
    bank_name: str
    account_number: str
    account_holder_name: str
    status: PayoutStatus
    requested_at: datetime
    processed_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_money(cls, v):
        return money_as_float(v)
