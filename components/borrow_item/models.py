"""Borrow item model for the database."""

from sqlalchemy import CheckConstraint, Column, Integer, Date, ForeignKey
from sqlalchemy.orm import relationship

from components.core.database import Base


class BorrowItem(Base):
    """A single line of a borrow request."""
    __tablename__ = "borrow_items"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_borrow_item_quantity_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    borrow_request_id = Column(
        Integer, ForeignKey("borrow_requests.id", ondelete="CASCADE"), nullable=False, index=True
    )
    equipment_id = Column(Integer, ForeignKey("equipment.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    borrow_date = Column(Date, nullable=False)
    return_date = Column(Date, nullable=False)

    # Relationships
    borrow_request = relationship("BorrowRequest", back_populates="items")
    equipment = relationship("Equipment", back_populates="borrow_items")
