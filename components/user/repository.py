"""Repository for user operations."""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.errors import StorageError, ValidationError
from components.core.security import get_password_hash
from components.user.models import User
from components.user.schemas import UserCreate

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for user operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def create(self, user: UserCreate) -> User:
        """Create a new user with a hashed password."""
        if await self.exists(user.email):
            raise ValidationError(f"User with email {user.email} already exists")

        db_user = User(
            name=user.name,
            email=user.email,
            password=get_password_hash(user.password),
            role=user.role.value,
        )
        self.session.add(db_user)
        try:
            await self.session.commit()
            await self.session.refresh(db_user)
        except IntegrityError as exc:
            await self.session.rollback()
            raise ValidationError(f"User with email {user.email} already exists") from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception("Failed to create user %s", user.email)
            raise StorageError(f"Failed to create user: {exc}") from exc

        logger.info("Created user %s with role %s", db_user.id, db_user.role)
        return db_user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        result = await self.session.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email, the login identity."""
        result = await self.session.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()

    async def get_all(self, skip: int = 0, limit: int = 100) -> List[User]:
        """Get all users."""
        query = select(User).order_by(User.id).offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def exists(self, email: str) -> bool:
        """Check if user with given email exists."""
        result = await self.session.execute(
            select(User.id).where(User.email == email)
        )
        return result.scalar_one_or_none() is not None
