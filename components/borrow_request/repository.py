"""Repository for borrow request operations."""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import case, delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from components.borrow_item.models import BorrowItem
from components.borrow_item.repository import BorrowItemRepository
from components.borrow_request import schemas
from components.borrow_request.models import BorrowRequest, RequestStatus
from components.core.errors import ConsistencyError, NotFoundError, StorageError, ValidationError
from components.equipment.models import Equipment
from components.user.models import User

logger = logging.getLogger(__name__)

# Allowed administrative status changes
TRANSITIONS = {
    RequestStatus.PENDING: {RequestStatus.APPROVED, RequestStatus.REJECTED},
    RequestStatus.APPROVED: {RequestStatus.RETURNED},
    RequestStatus.REJECTED: set(),
    RequestStatus.RETURNED: set(),
}


class BorrowRequestRepository:
    """Repository for borrow requests and their items."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session
        self.items = BorrowItemRepository(session)

    async def create(self, request: schemas.BorrowRequestCreate) -> BorrowRequest:
        """
        Create a borrow request together with its items.

        The header is flushed first to obtain its id, then every item is added
        in input order bound to that id. Header and items are committed in one
        transaction: if any item fails nothing is persisted and the first error
        is raised.

        Returns the request header. Use get_request_details for the item lines.
        Inventory is not touched until the request is approved.

        Raises:
            ValidationError: no items, non-pending initial status or an invalid item
            NotFoundError: unknown user or equipment
            StorageError: the database rejected the write
        """
        if not request.items:
            raise ValidationError("A borrow request needs at least one item")
        if request.status != RequestStatus.PENDING:
            raise ValidationError(f"A new borrow request must be pending, got {request.status.value}")

        try:
            user = await self.session.get(User, request.user_id)
            if user is None:
                raise NotFoundError("User", request.user_id)

            db_request = BorrowRequest(
                user_id=request.user_id,
                request_date=request.request_date,
                status=request.status.value,
            )
            self.session.add(db_request)
            await self.session.flush()

            for item in request.items:
                await self.items.add_to_request(item, db_request.id)

            await self.session.commit()
            await self.session.refresh(db_request)
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception("Failed to create borrow request for user %s", request.user_id)
            raise StorageError(f"Failed to create borrow request: {exc}") from exc
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Created borrow request %s for user %s with %d item(s)",
            db_request.id, request.user_id, len(request.items),
        )
        return db_request

    async def get_by_id(self, request_id: int) -> Optional[BorrowRequest]:
        """Get borrow request by ID."""
        result = await self.session.execute(
            select(BorrowRequest).where(BorrowRequest.id == request_id)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> List[BorrowRequest]:
        """Get all borrow requests."""
        result = await self.session.execute(select(BorrowRequest).order_by(BorrowRequest.id))
        return list(result.scalars().all())

    async def get_by_user_id(self, user_id: int) -> List[BorrowRequest]:
        """Get all borrow requests owned by a user."""
        result = await self.session.execute(
            select(BorrowRequest)
            .where(BorrowRequest.user_id == user_id)
            .order_by(BorrowRequest.id)
        )
        return list(result.scalars().all())

    async def get_request_details(self, request_id: int) -> List[schemas.BorrowRequestDetail]:
        """
        Get the flattened item lines of a request joined with their equipment.

        Rows are ordered by equipment name, then by item id. An unknown request
        or a request without items gives an empty list.
        """
        query = (
            select(
                Equipment.name.label("equipment_name"),
                Equipment.tag.label("equipment_tag"),
                BorrowItem.quantity.label("borrowed_quantity"),
                BorrowItem.borrow_date.label("borrow_date"),
                BorrowItem.return_date.label("return_date"),
            )
            .select_from(BorrowItem)
            .join(BorrowRequest, BorrowItem.borrow_request_id == BorrowRequest.id)
            .join(Equipment, BorrowItem.equipment_id == Equipment.id)
            .where(BorrowRequest.id == request_id)
            .order_by(Equipment.name, BorrowItem.id)
        )
        result = await self.session.execute(query)
        return [schemas.BorrowRequestDetail(**row._mapping) for row in result.all()]

    async def update_status(self, request_id: int, status: RequestStatus) -> BorrowRequest:
        """
        Move a request to a new status and adjust inventory.

        Approving takes every item's quantity out of the equipment's available
        quantity with a conditional UPDATE, so concurrent approvals cannot
        over-allocate. Returning puts the quantities back. Everything happens in
        one transaction.

        Raises:
            NotFoundError: unknown request
            ConsistencyError: illegal transition or not enough inventory
        """
        try:
            db_request = await self.get_by_id(request_id)
            if db_request is None:
                raise NotFoundError("BorrowRequest", request_id)

            current = RequestStatus(db_request.status)
            if status not in TRANSITIONS[current]:
                raise ConsistencyError(
                    f"Cannot change borrow request {request_id} from {current.value} to {status.value}"
                )

            items = await self.items.get_by_request_id(request_id)
            if status == RequestStatus.APPROVED:
                for item in items:
                    await self._take_inventory(item)
                db_request.approval_date = datetime.now()
            elif status == RequestStatus.RETURNED:
                for item in items:
                    await self._restore_inventory(item)

            db_request.status = status.value
            await self.session.commit()
            await self.session.refresh(db_request)
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception("Failed to update borrow request %s", request_id)
            raise StorageError(f"Failed to update borrow request: {exc}") from exc
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Borrow request %s is now %s", request_id, status.value)
        return db_request

    async def delete(self, request_id: int) -> None:
        """
        Delete a request and its items.

        An approved request still holds inventory and has to be returned first.
        """
        try:
            db_request = await self.get_by_id(request_id)
            if db_request is None:
                raise NotFoundError("BorrowRequest", request_id)
            if db_request.status == RequestStatus.APPROVED.value:
                raise ConsistencyError(
                    f"Borrow request {request_id} is approved; return it before deleting"
                )

            await self.session.execute(
                delete(BorrowItem).where(BorrowItem.borrow_request_id == request_id)
            )
            await self.session.delete(db_request)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception("Failed to delete borrow request %s", request_id)
            raise StorageError(f"Failed to delete borrow request: {exc}") from exc
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Deleted borrow request %s", request_id)

    async def _take_inventory(self, item: BorrowItem) -> None:
        result = await self.session.execute(
            update(Equipment)
            .where(
                Equipment.id == item.equipment_id,
                Equipment.available_quantity >= item.quantity,
            )
            .values(available_quantity=Equipment.available_quantity - item.quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise ConsistencyError(
                f"Not enough equipment {item.equipment_id} available for {item.quantity} unit(s)"
            )

    async def _restore_inventory(self, item: BorrowItem) -> None:
        restored = Equipment.available_quantity + item.quantity
        # Capped at total_quantity in case the total was lowered while the items were out
        await self.session.execute(
            update(Equipment)
            .where(Equipment.id == item.equipment_id)
            .values(
                available_quantity=case(
                    (restored > Equipment.total_quantity, Equipment.total_quantity),
                    else_=restored,
                )
            )
            .execution_options(synchronize_session=False)
        )
