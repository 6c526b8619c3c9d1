import pytest

from components.core.errors import ValidationError
from components.core.security import get_password_hash
from components.user.models import UserRole
from components.user.repository import UserRepository
from components.user.schemas import UserCreate


class TestUserRepository:
    """User storage"""

    async def test_create_hashes_password(self, session):
        repo = UserRepository(session)
        user = await repo.create(UserCreate(
            name="Staff Member", email="staff@example.com", password="secret123",
            role=UserRole.STAFF,
        ))

        assert user.id is not None
        assert user.role == "staff"
        assert user.password != "secret123"
        salt, _ = user.password.split(":")
        assert user.password == get_password_hash("secret123", salt)
        assert user.password != get_password_hash("wrong", salt)

    async def test_duplicate_email_is_rejected(self, session, sample_user):
        repo = UserRepository(session)
        with pytest.raises(ValidationError):
            await repo.create(UserCreate(
                name="Copy", email=sample_user.email, password="secret123",
            ))

    async def test_get_by_email(self, session, sample_user):
        repo = UserRepository(session)
        assert (await repo.get_by_email("test@example.com")).id == sample_user.id
        assert await repo.get_by_email("nobody@example.com") is None

    async def test_get_all(self, session, sample_user):
        repo = UserRepository(session)
        assert [user.id for user in await repo.get_all()] == [sample_user.id]
