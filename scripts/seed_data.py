"""Script to seed test data into the database."""

import asyncio
import logging
from datetime import date, timedelta

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import db_manager
from components.core.logger import setup_logging
from components.borrow_item.schemas import BorrowItemLine
from components.borrow_request.repository import BorrowRequestRepository
from components.borrow_request.schemas import BorrowRequestCreate
from components.equipment.models import EquipmentCondition
from components.equipment.repository import EquipmentRepository
from components.equipment.schemas import EquipmentCreate
from components.user.models import UserRole
from components.user.repository import UserRepository
from components.user.schemas import UserCreate

logger = logging.getLogger(__name__)

EQUIPMENT = [
    EquipmentCreate(name="Laptop", tag="LAP001", condition=EquipmentCondition.GOOD,
                    total_quantity=10, available_quantity=8),
    EquipmentCreate(name="Projector", tag="PRJ001", condition=EquipmentCondition.GOOD,
                    total_quantity=4, available_quantity=3),
    EquipmentCreate(name="Microscope", tag="MIC001", condition=EquipmentCondition.EXCELLENT,
                    total_quantity=6, available_quantity=6),
    EquipmentCreate(name="Soldering Station", tag="SOL001", condition=EquipmentCondition.FAIR,
                    total_quantity=5, available_quantity=2),
]

USERS = [
    UserCreate(name="Alex Student", email="student@example.com", password="password123",
               role=UserRole.STUDENT),
    UserCreate(name="Sam Staff", email="staff@example.com", password="password123",
               role=UserRole.STAFF),
    UserCreate(name="Admin", email="admin@example.com", password="password123",
               role=UserRole.ADMIN),
]


async def clear_data(db: AsyncSession) -> None:
    """Remove all rows, children first."""
    for table in ("borrow_items", "borrow_requests", "equipment", "users"):
        await db.execute(text(f"DELETE FROM {table}"))
    await db.commit()
    db.expunge_all()


async def seed_data(db: AsyncSession) -> None:
    """Seed users, equipment and one pending borrow request."""
    await clear_data(db)

    equipment_repo = EquipmentRepository(db)
    equipment = [await equipment_repo.create(item) for item in EQUIPMENT]

    user_repo = UserRepository(db)
    users = [await user_repo.create(user) for user in USERS]

    today = date.today()
    request = BorrowRequestCreate(
        user_id=users[0].id,
        items=[
            BorrowItemLine(equipment_id=equipment[0].id, quantity=2,
                           borrow_date=today, return_date=today + timedelta(days=7)),
            BorrowItemLine(equipment_id=equipment[1].id, quantity=1,
                           borrow_date=today, return_date=today + timedelta(days=3)),
        ],
    )
    await BorrowRequestRepository(db).create(request)
    logger.info("Seeded %d users and %d equipment items", len(users), len(equipment))


async def main() -> None:
    setup_logging()
    await db_manager.create_all()
    async with db_manager.get_db() as db:
        await seed_data(db)
    await db_manager.engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
