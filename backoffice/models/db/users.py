from __future__ import annotations
"""SQLAlchemy model for users (affiliates and admins)."""
from typing import TYPE_CHECKING
from sqlalchemy import Integer, String, DateTime, Enum, CheckConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column

if TYPE_CHECKING:  # pragma: no cover
    from .registrations import Registration
    from .link_clicks import LinkClick
    from .payout_requests import PayoutRequest
from sqlalchemy.sql import func
from backoffice.database import Base
from .enums import UserRole, enum_values

class User(Base):
    __tablename__ = "users"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role", values_callable=enum_values), nullable=False, index=True
    )
    # Only affiliates carry a code; unique across all users
    affiliate_code: Mapped[str | None] = mapped_column(String, unique=True, nullable=True, index=True)

    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Relationships
    registrations: Mapped[list["Registration"]] = relationship("Registration", back_populates="affiliate")
    link_clicks: Mapped[list["LinkClick"]] = relationship("LinkClick", back_populates="affiliate")
    payout_requests: Mapped[list["PayoutRequest"]] = relationship("PayoutRequest", back_populates="affiliate")

    __table_args__ = (
        CheckConstraint(
            "role != 'affiliate' OR affiliate_code IS NOT NULL",
            name="affiliate_users_must_have_code"
        ),
        CheckConstraint(
            "role = 'affiliate' OR affiliate_code IS NULL",
            name="non_affiliate_users_no_code"
        ),
    )
