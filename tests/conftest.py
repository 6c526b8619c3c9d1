import os
from datetime import date, timedelta

# Must be set before the application modules read their settings
os.environ.setdefault("DB_URL", "sqlite+aiosqlite://")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from components.core.database import DatabaseManager
from components.core.init_db import get_db
from components.equipment.models import Equipment, EquipmentCondition
from components.user.models import User, UserRole
from components.core.security import get_password_hash
from restapi.router import create_app


@pytest.fixture
async def db_manager():
    """Database manager bound to a fresh in-memory database"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
    )
    manager = DatabaseManager(engine)
    await manager.create_all()
    yield manager
    await engine.dispose()


@pytest.fixture
async def session(db_manager):
    """Database session"""
    async with db_manager.get_db() as session:
        yield session


@pytest.fixture
async def client(db_manager):
    """HTTP client with the database dependency pointing at the test database"""
    app = create_app()

    async def override_get_db():
        async with db_manager.get_db() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def sample_user(session):
    """Student who owns the test requests"""
    user = User(
        name="Test User",
        email="test@example.com",
        password=get_password_hash("password123"),
        role=UserRole.STUDENT.value,
    )
    session.add(user)
    await session.commit()
    return user


@pytest.fixture
async def catalog(session):
    """Small equipment catalog"""
    items = [
        Equipment(name="Laptop", tag="LAP001", condition=EquipmentCondition.GOOD.value,
                  total_quantity=10, available_quantity=8),
        Equipment(name="Projector", tag="PRJ001", condition=EquipmentCondition.GOOD.value,
                  total_quantity=4, available_quantity=3),
        Equipment(name="Microscope", tag="MIC001", condition=EquipmentCondition.EXCELLENT.value,
                  total_quantity=6, available_quantity=6),
        Equipment(name="laptop stand", tag="STD001", condition=EquipmentCondition.FAIR.value,
                  total_quantity=5, available_quantity=0),
    ]
    session.add_all(items)
    await session.commit()
    return items


@pytest.fixture
def dates():
    """Borrow and return dates"""
    today = date(2024, 9, 2)
    return today, today + timedelta(days=7)
