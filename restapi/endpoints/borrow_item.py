"""Borrow item endpoints for the API."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.borrow_item.repository import BorrowItemRepository
from components.borrow_item import schemas

router = APIRouter(
    prefix="/borrow-items",
    tags=["borrow items"],
    responses={404: {"description": "Not found"}},
)


@router.post("/", response_model=schemas.BorrowItem, status_code=201)
async def create_borrow_item(
    item: schemas.BorrowItemCreate,
    db: AsyncSession = Depends(get_db)
):
    """Add an item to an existing borrow request."""
    repo = BorrowItemRepository(db)
    return await repo.create(item)
