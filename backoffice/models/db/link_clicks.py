from __future__ import annotations
"""SQLAlchemy model for referral link clicks (append-only)."""
from typing import TYPE_CHECKING
from sqlalchemy import Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship, Mapped, mapped_column

if TYPE_CHECKING:  # pragma: no cover
    from .users import User
from sqlalchemy.sql import func
from backoffice.database import Base

class LinkClick(Base):
    __tablename__ = "link_clicks"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    affiliate_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    ip_address: Mapped[str] = mapped_column(String, nullable=False)
    user_agent: Mapped[str | None] = mapped_column(String, nullable=True)
    clicked_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    affiliate: Mapped["User"] = relationship("User", back_populates="link_clicks")
