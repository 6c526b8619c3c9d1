"""Borrow request model for the database."""

import enum
from datetime import datetime

from sqlalchemy import Column, Integer, DateTime, String, ForeignKey
from sqlalchemy.orm import relationship

from components.core.database import Base


class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    RETURNED = "returned"


class BorrowRequest(Base):
    """Borrow request header owning one or more borrow items."""
    __tablename__ = "borrow_requests"

    id = Column(Integer, primary_key=True, index=True)
    request_date = Column(DateTime, nullable=False, default=datetime.now)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=RequestStatus.PENDING.value)
    approval_date = Column(DateTime, nullable=True)

    # Relationships
    user = relationship("User", back_populates="borrow_requests")
    items = relationship(
        "BorrowItem",
        back_populates="borrow_request",
        order_by="BorrowItem.id",
        passive_deletes=True,
    )
