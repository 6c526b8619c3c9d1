"""User endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.user.repository import UserRepository
from components.user import schemas

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={404: {"description": "Not found"}},
)


@router.post("/", response_model=schemas.User, status_code=201)
async def create_user(
    user: schemas.UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create a new user."""
    repo = UserRepository(db)
    return await repo.create(user)


@router.get("/", response_model=List[schemas.User])
async def read_users(
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=100, description="Number of records to return"),
    db: AsyncSession = Depends(get_db)
):
    """Get list of users."""
    repo = UserRepository(db)
    return await repo.get_all(skip=skip, limit=limit)


@router.get("/by-email/{email}", response_model=schemas.User)
async def read_user_by_email(
    email: str,
    db: AsyncSession = Depends(get_db)
):
    """Get a specific user by email."""
    repo = UserRepository(db)
    user = await repo.get_by_email(email)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/{user_id}", response_model=schemas.User)
async def read_user(
    user_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Get a specific user by ID."""
    repo = UserRepository(db)
    user = await repo.get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
