"""
Pydantic schemas for user registration and login.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, EmailStr, ConfigDict
from backoffice.config import PASSWORD_SETTINGS
from ..db.enums import UserRole

class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=PASSWORD_SETTINGS["min_length"])
    full_name: str = Field(min_length=1, max_length=200)
    role: UserRole

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "email": "jane@example.com",
            "password": "s3cret-pass",
            "full_name": "Jane Smith",
            "role": "affiliate"
        }
    })

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class UserRead(BaseModel):
    """Public view of a user; the password hash is never exposed."""
    id: int
    email: str
    full_name: str
    role: UserRole
    affiliate_code: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class AffiliateCodeRead(BaseModel):
    affiliate_code: str
