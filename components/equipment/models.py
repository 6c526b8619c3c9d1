"""Equipment model for the database."""

import enum

from sqlalchemy import CheckConstraint, Column, Integer, String
from sqlalchemy.orm import relationship

from components.core.database import Base


class EquipmentCondition(str, enum.Enum):
    """Physical condition of an equipment item."""
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"


class Equipment(Base):
    """Equipment model representing a lendable item in the catalog."""
    __tablename__ = "equipment"
    __table_args__ = (
        CheckConstraint("total_quantity >= 0", name="ck_equipment_total_non_negative"),
        CheckConstraint("available_quantity >= 0", name="ck_equipment_available_non_negative"),
        CheckConstraint("available_quantity <= total_quantity", name="ck_equipment_available_le_total"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    tag = Column(String(50), unique=True, nullable=False)
    condition = Column(String(20), nullable=False, default=EquipmentCondition.GOOD.value)
    total_quantity = Column(Integer, nullable=False, default=0)
    available_quantity = Column(Integer, nullable=False, default=0)

    # Relationship with BorrowItems
    borrow_items = relationship("BorrowItem", back_populates="equipment")
