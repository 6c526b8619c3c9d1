"""Equipment endpoints for the API."""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.equipment.repository import EquipmentRepository
from components.equipment import schemas

router = APIRouter(
    prefix="/equipment",
    tags=["equipment"],
    responses={404: {"description": "Not found"}},
)


@router.post("/", response_model=schemas.Equipment, status_code=201)
async def create_equipment(
    equipment: schemas.EquipmentCreate,
    db: AsyncSession = Depends(get_db)
):
    """Add equipment to the catalog."""
    repo = EquipmentRepository(db)
    return await repo.create(equipment)


@router.get("/", response_model=List[schemas.Equipment])
async def search_equipment(
    name: Optional[str] = Query(None, description="Case-insensitive part of the name"),
    availablequantity: Optional[str] = Query(None, description="Upper bound for the available quantity"),
    condition: Optional[str] = Query(None, description="Exact condition, 'All' for any"),
    db: AsyncSession = Depends(get_db)
):
    """
    Search the catalog.

    Every parameter is optional. Empty names, the condition 'All' and the
    value 'undefined' are ignored; without filters the whole catalog is
    returned.
    """
    params = {"name": name, "availablequantity": availablequantity, "condition": condition}
    repo = EquipmentRepository(db)
    return await repo.search({key: value for key, value in params.items() if value is not None})


@router.get("/{equipment_id}", response_model=schemas.Equipment)
async def read_equipment(
    equipment_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Get a specific equipment by ID."""
    repo = EquipmentRepository(db)
    equipment = await repo.get_by_id(equipment_id)
    if equipment is None:
        raise HTTPException(status_code=404, detail="Equipment not found")
    return equipment


@router.put("/{equipment_id}", response_model=schemas.Equipment)
async def replace_equipment(
    equipment_id: int,
    equipment: schemas.EquipmentReplace,
    db: AsyncSession = Depends(get_db)
):
    """Create the equipment with this ID or update the supplied fields."""
    repo = EquipmentRepository(db)
    return await repo.replace(equipment_id, equipment)
