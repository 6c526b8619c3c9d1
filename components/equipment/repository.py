"""Repository for equipment operations."""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.errors import StorageError, ValidationError
from components.equipment.filters import compile_equipment_query
from components.equipment.models import Equipment
from components.equipment.schemas import EquipmentCreate, EquipmentReplace

logger = logging.getLogger(__name__)


def check_quantities(total_quantity: int, available_quantity: int) -> None:
    """Enforce available_quantity <= total_quantity."""
    if available_quantity > total_quantity:
        raise ValidationError(
            f"available_quantity ({available_quantity}) cannot exceed "
            f"total_quantity ({total_quantity})"
        )


class EquipmentRepository:
    """Repository for equipment operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def create(self, equipment: EquipmentCreate) -> Equipment:
        """Create a new equipment record."""
        check_quantities(equipment.total_quantity, equipment.available_quantity)
        db_equipment = Equipment(**equipment.model_dump(mode="json"))
        self.session.add(db_equipment)
        await self._commit(db_equipment, equipment.tag)
        logger.info("Created equipment %s (%s)", db_equipment.id, db_equipment.tag)
        return db_equipment

    async def get_by_id(self, equipment_id: int) -> Optional[Equipment]:
        """Get equipment by ID."""
        result = await self.session.execute(
            select(Equipment).where(Equipment.id == equipment_id)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> List[Equipment]:
        """Get the whole catalog."""
        result = await self.session.execute(select(Equipment).order_by(Equipment.id))
        return list(result.scalars().all())

    async def search(self, params: Optional[Mapping[str, Any]] = None) -> List[Equipment]:
        """
        Search the catalog with raw query parameters.

        Supported keys are name (case-insensitive substring), availablequantity
        (upper bound of the range [0, n]) and condition (exact match). Missing,
        empty and sentinel values apply no filter, so an empty mapping returns
        the whole catalog.

        Raises:
            ValidationError: availablequantity is not an integer
        """
        query = compile_equipment_query(params)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def replace(self, equipment_id: int, equipment: EquipmentReplace) -> Equipment:
        """
        Create or update equipment by ID.

        Fields that were not set on the payload are left unchanged on an
        existing record. A missing record is created from {id} plus the
        supplied fields.

        Raises:
            ValidationError: a field was sent as null, or available_quantity
                would exceed total_quantity
            StorageError: the database rejected the write
        """
        fields: Dict[str, Any] = equipment.model_dump(exclude_unset=True, mode="json")
        nulls = [key for key, value in fields.items() if value is None]
        if nulls:
            raise ValidationError(f"{', '.join(nulls)} cannot be null")

        db_equipment = await self.get_by_id(equipment_id)
        if db_equipment is None:
            logger.info("Creating new equipment with ID %s", equipment_id)
            db_equipment = Equipment(id=equipment_id, **fields)
            check_quantities(db_equipment.total_quantity or 0, db_equipment.available_quantity or 0)
            self.session.add(db_equipment)
        else:
            check_quantities(
                fields.get("total_quantity", db_equipment.total_quantity),
                fields.get("available_quantity", db_equipment.available_quantity),
            )
            for key, value in fields.items():
                setattr(db_equipment, key, value)

        await self._commit(db_equipment, equipment_id)
        return db_equipment

    async def _commit(self, db_equipment: Equipment, label: Any) -> None:
        try:
            await self.session.commit()
            await self.session.refresh(db_equipment)
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception("Failed to persist equipment %s", label)
            raise StorageError(f"Failed to persist equipment: {exc}") from exc
