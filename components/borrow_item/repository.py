"""Repository for borrow item operations."""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from components.borrow_item.models import BorrowItem
from components.borrow_item.schemas import BorrowItemBase, BorrowItemCreate
from components.borrow_request.models import BorrowRequest
from components.core.errors import NotFoundError, StorageError, ValidationError
from components.equipment.models import Equipment

logger = logging.getLogger(__name__)


def validate_item(item: BorrowItemBase) -> None:
    """Reject non-positive quantities and inverted date ranges."""
    quantity = item.quantity
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError(f"quantity must be a positive integer, got {quantity!r}")
    if item.return_date < item.borrow_date:
        raise ValidationError(
            f"return_date ({item.return_date}) is before borrow_date ({item.borrow_date})"
        )


class BorrowItemRepository:
    """Repository for borrow item operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def add_to_request(self, item: BorrowItemBase, borrow_request_id: int) -> BorrowItem:
        """
        Add a borrow item bound to borrow_request_id to the current transaction.

        The owning request is always the one passed in, never an id carried by
        the payload. The item is flushed but not committed, so the caller
        decides the transaction boundary.

        Raises:
            ValidationError: quantity is not a positive integer or dates are inverted
            NotFoundError: the equipment does not exist
        """
        validate_item(item)
        equipment = await self.session.get(Equipment, item.equipment_id)
        if equipment is None:
            raise NotFoundError("Equipment", item.equipment_id)

        db_item = BorrowItem(
            borrow_request_id=borrow_request_id,
            equipment_id=item.equipment_id,
            quantity=item.quantity,
            borrow_date=item.borrow_date,
            return_date=item.return_date,
        )
        self.session.add(db_item)
        await self.session.flush()
        return db_item

    async def create(self, item: BorrowItemCreate) -> BorrowItem:
        """Create a single borrow item for an existing request and commit it."""
        try:
            request = await self.session.get(BorrowRequest, item.borrow_request_id)
            if request is None:
                raise NotFoundError("BorrowRequest", item.borrow_request_id)
            db_item = await self.add_to_request(item, item.borrow_request_id)
            await self.session.commit()
            await self.session.refresh(db_item)
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception("Failed to create borrow item for request %s", item.borrow_request_id)
            raise StorageError(f"Failed to create borrow item: {exc}") from exc
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Added borrow item %s to request %s", db_item.id, item.borrow_request_id)
        return db_item

    async def get_by_request_id(self, borrow_request_id: int) -> List[BorrowItem]:
        """Get the items of a request in insertion order."""
        result = await self.session.execute(
            select(BorrowItem)
            .where(BorrowItem.borrow_request_id == borrow_request_id)
            .order_by(BorrowItem.id)
        )
        return list(result.scalars().all())
