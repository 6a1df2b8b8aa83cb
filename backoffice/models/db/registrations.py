from __future__ import annotations
"""SQLAlchemy model for student registrations made through an affiliate link."""
from decimal import Decimal
from typing import TYPE_CHECKING
from sqlalchemy import Integer, String, DateTime, Numeric, Enum, ForeignKey
from sqlalchemy.orm import relationship, Mapped, mapped_column

if TYPE_CHECKING:  # pragma: no cover
    from .users import User
    from .programs import Program
from sqlalchemy.sql import func
from backoffice.database import Base
from .enums import RegistrationStatus, enum_values

class Registration(Base):
    __tablename__ = "registrations"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    affiliate_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    program_id: Mapped[int] = mapped_column(Integer, ForeignKey("programs.id"), nullable=False, index=True)
    student_name: Mapped[str] = mapped_column(String, nullable=False)
    student_email: Mapped[str] = mapped_column(String, nullable=False)
    student_phone: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[RegistrationStatus] = mapped_column(
        Enum(RegistrationStatus, name="registration_status", values_callable=enum_values),
        default=RegistrationStatus.PENDING,
        nullable=False,
        index=True,
    )
    # Snapshot at creation time; not recomputed when the program changes
    commission_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    registration_date: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    payment_verified_at: Mapped[DateTime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    affiliate: Mapped["User"] = relationship("User", back_populates="registrations")
    program: Mapped["Program"] = relationship("Program", back_populates="registrations")
