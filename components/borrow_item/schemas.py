"""Pydantic schemas for borrow item data validation."""

from datetime import date
from typing import Optional
from pydantic import BaseModel


class BorrowItemBase(BaseModel):
    """Base borrow item schema."""
    equipment_id: int
    quantity: int
    borrow_date: date
    return_date: date


class BorrowItemLine(BorrowItemBase):
    """
    Item line as submitted by a caller.

    Any id or borrow_request_id sent by the caller is accepted but never used:
    ownership is always assigned by the request that creates the item.
    """
    id: Optional[int] = None
    borrow_request_id: Optional[int] = None


class BorrowItemCreate(BorrowItemBase):
    """Schema for standalone borrow item creation."""
    borrow_request_id: int


class BorrowItem(BorrowItemBase):
    """Schema for borrow item response."""
    id: int
    borrow_request_id: int

    class Config:
        from_attributes = True
