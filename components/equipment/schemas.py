"""Pydantic schemas for equipment data validation."""

from typing import Optional
from pydantic import BaseModel, Field

from components.equipment.models import EquipmentCondition


class EquipmentBase(BaseModel):
    """Base equipment schema."""
    name: str = Field(..., min_length=1, max_length=100)
    tag: str = Field(..., min_length=1, max_length=50)
    condition: EquipmentCondition = EquipmentCondition.GOOD
    total_quantity: int = Field(0, ge=0)
    available_quantity: int = Field(0, ge=0)


class EquipmentCreate(EquipmentBase):
    """Schema for equipment creation."""
    pass


class EquipmentReplace(BaseModel):
    """Schema for create-or-update by id. Only fields that are set are written."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    tag: Optional[str] = Field(None, min_length=1, max_length=50)
    condition: Optional[EquipmentCondition] = None
    total_quantity: Optional[int] = Field(None, ge=0)
    available_quantity: Optional[int] = Field(None, ge=0)


class Equipment(EquipmentBase):
    """Schema for equipment response."""
    id: int

    class Config:
        from_attributes = True


class EquipmentFilter(BaseModel):
    """Sanitized catalog filter. A field set to None applies no predicate."""
    name: Optional[str] = None
    availablequantity: Optional[int] = None
    condition: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.availablequantity is None and self.condition is None
