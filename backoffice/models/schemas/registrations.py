"""
Pydantic schemas for student registrations.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, EmailStr, ConfigDict, field_validator
from ..db.enums import RegistrationStatus
from .base import money_as_float

class RegistrationCreate(BaseModel):
    """A prospective student signing up through an affiliate link."""
    affiliate_code: str
    program_id: int
    student_name: str = Field(min_length=1, max_length=200)
    student_email: EmailStr
    student_phone: str = Field(min_length=1, max_length=50)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "affiliate_code": "AFF7K2QX",
            "program_id": 3,
            "student_name": "Budi Santoso",
            "student_email": "budi@example.com",
            "student_phone": "+628123456789"
        }
    })

class RegistrationRead(BaseModel):
    id: int
    affiliate_id: int
    program_id: int
    student_name: str
    student_email: str
    student_phone: str
    status: RegistrationStatus
    commission_amount: float
    registration_date: datetime
    payment_verified_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("commission_amount", mode="before")
    @classmethod
    def coerce_money(cls, v):
        return money_as_float(v)
