"""Pydantic schemas for borrow request data validation."""

from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from components.borrow_item.schemas import BorrowItemLine
from components.borrow_request.models import RequestStatus


class BorrowRequestBase(BaseModel):
    """Base borrow request schema."""
    user_id: int
    request_date: datetime = Field(default_factory=datetime.now)
    status: RequestStatus = RequestStatus.PENDING


class BorrowRequestCreate(BorrowRequestBase):
    """Schema for borrow request creation with its item lines."""
    items: List[BorrowItemLine] = []


class BorrowRequest(BorrowRequestBase):
    """Schema for borrow request header response."""
    id: int
    approval_date: Optional[datetime] = None

    class Config:
        from_attributes = True


class BorrowRequestStatusUpdate(BaseModel):
    """Schema for an administrative status change."""
    status: RequestStatus


class BorrowRequestDetail(BaseModel):
    """One flattened row of the request x item x equipment report."""
    equipment_name: str
    equipment_tag: str
    borrowed_quantity: int
    borrow_date: date
    return_date: date

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
