"""Borrow request endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.borrow_request.repository import BorrowRequestRepository
from components.borrow_request import schemas

router = APIRouter(
    prefix="/borrow-requests",
    tags=["borrow requests"],
    responses={404: {"description": "Not found"}},
)


@router.post("/", response_model=schemas.BorrowRequest, status_code=201)
async def create_borrow_request(
    request: schemas.BorrowRequestCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Submit a borrow request with its items.

    The request and all items are stored together or not at all. The
    response holds the request header; item lines are available from
    /borrow-requests/{request_id}/details.
    """
    repo = BorrowRequestRepository(db)
    return await repo.create(request)


@router.get("/", response_model=List[schemas.BorrowRequest])
async def read_borrow_requests(db: AsyncSession = Depends(get_db)):
    """Get all borrow requests."""
    repo = BorrowRequestRepository(db)
    return await repo.get_all()


@router.get("/user/{user_id}", response_model=List[schemas.BorrowRequest])
async def read_user_borrow_requests(
    user_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Get the borrow requests of a user."""
    repo = BorrowRequestRepository(db)
    return await repo.get_by_user_id(user_id)


@router.get("/{request_id}", response_model=schemas.BorrowRequest)
async def read_borrow_request(
    request_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Get a specific borrow request by ID."""
    repo = BorrowRequestRepository(db)
    borrow_request = await repo.get_by_id(request_id)
    if borrow_request is None:
        raise HTTPException(status_code=404, detail="Borrow request not found")
    return borrow_request


@router.get("/{request_id}/details", response_model=List[schemas.BorrowRequestDetail])
async def read_borrow_request_details(
    request_id: int,
    db: AsyncSession = Depends(get_db)
):
    """
    Get the item lines of a request with equipment name and tag.

    Lines are ordered by equipment name. An unknown request gives an empty list.
    """
    repo = BorrowRequestRepository(db)
    return await repo.get_request_details(request_id)


@router.patch("/{request_id}/status", response_model=schemas.BorrowRequest)
async def update_borrow_request_status(
    request_id: int,
    update: schemas.BorrowRequestStatusUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Approve, reject or return a borrow request."""
    repo = BorrowRequestRepository(db)
    return await repo.update_status(request_id, update.status)


@router.delete("/{request_id}")
async def delete_borrow_request(
    request_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Delete a borrow request and its items."""
    repo = BorrowRequestRepository(db)
    await repo.delete(request_id)
    return {"message": "Borrow request deleted successfully"}
