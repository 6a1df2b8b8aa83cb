"""
Pydantic schemas for program management and commission lookups.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from ..db.enums import ProgramType, CommissionType
from .base import money_as_float

MAX_PERCENTAGE_RATE = Decimal("100")

class ProgramCreate(BaseModel):
    name: str = Field(min_length=1, max_length=300)
    type: ProgramType
    fee: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    commission_rate: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    commission_type: CommissionType
    description: Optional[str] = None
    is_active: bool = True

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "name": "Online TOEFL",
            "type": "online",
            "fee": 2500000,
            "commission_rate": 10,
            "commission_type": "percentage",
            "description": "TOEFL preparation, fully online"
        }
    })

    @model_validator(mode="after")
    def check_percentage_rate(self):
        if self.commission_type == CommissionType.PERCENTAGE and self.commission_rate > MAX_PERCENTAGE_RATE:
            raise ValueError("Percentage commission rate cannot exceed 100")
        return self

class ProgramUpdate(BaseModel):
    """Partial update; only fields present in the request body are written."""
    name: Optional[str] = Field(None, min_length=1, max_length=300)
    type: Optional[ProgramType] = None
    fee: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    commission_rate: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    commission_type: Optional[CommissionType] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

class ProgramRead(BaseModel):
    id: int
    name: str
    type: ProgramType
    fee: float
    commission_rate: float
    commission_type: CommissionType
    description: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("fee", "commission_rate", mode="before")
    @classmethod
    def coerce_money(cls, v):
        return money_as_float(v)

class CommissionPreview(BaseModel):
    program_id: int
    commission_type: CommissionType
    commission_amount: float

class CommissionRateRead(BaseModel):
    rate: float
    type: CommissionType
