from __future__ import annotations
"""SQLAlchemy model for sellable programs (courses)."""
from decimal import Decimal
from typing import TYPE_CHECKING
from sqlalchemy import Integer, String, Text, DateTime, Boolean, Numeric, Enum
from sqlalchemy.orm import relationship, Mapped, mapped_column

if TYPE_CHECKING:  # pragma: no cover
    from .registrations import Registration
from sqlalchemy.sql import func
from backoffice.database import Base
from .enums import ProgramType, CommissionType, enum_values

class Program(Base):
    __tablename__ = "programs"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False, index=True)
    type: Mapped[ProgramType] = mapped_column(
        Enum(ProgramType, name="program_type", values_callable=enum_values), nullable=False
    )
    fee: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    # Percentage (0-100) or flat amount depending on commission_type
    commission_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    commission_type: Mapped[CommissionType] = mapped_column(
        Enum(CommissionType, name="commission_type", values_callable=enum_values), nullable=False
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Soft delete flag; programs are never physically removed
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    registrations: Mapped[list["Registration"]] = relationship("Registration", back_populates="program")
