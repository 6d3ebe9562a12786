from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Optional

from wms.models.location import Location

# Campos que se pueden modificar después de crear la ubicación
UPDATABLE_FIELDS = ("address", "is_occupied")

async def create_location(db: AsyncSession, group_id: int, layout_id: int, row: int, column: int, address: str, is_occupied: bool = False) -> int:
    db_location = Location(
        group_id=group_id,
        layout_id=layout_id,
        row=row,
        column=column,
        address=address,
        is_occupied=is_occupied,
    )
    db.add(db_location)
    await db.commit()
    await db.refresh(db_location)
    return db_location.id

async def get_location(db: AsyncSession, location_id: int) -> Optional[Location]:
    result = await db.execute(
        select(Location).where(Location.id == location_id)
    )
    return result.scalars().first()

async def get_location_at(db: AsyncSession, group_id: int, row: int, column: int) -> Optional[Location]:
    result = await db.execute(
        select(Location).where(
            Location.group_id == group_id,
            Location.row == row,
            Location.column == column,
        )
    )
    return result.scalars().first()

async def get_locations_by_group_id(db: AsyncSession, group_id: int) -> List[Location]:
    result = await db.execute(
        select(Location).where(Location.group_id == group_id)
    )
    return result.scalars().all()

async def get_locations_by_layout_id(db: AsyncSession, layout_id: int) -> List[Location]:
    result = await db.execute(
        select(Location).where(Location.layout_id == layout_id)
    )
    return result.scalars().all()

async def update_location(db: AsyncSession, location_id: int, changes: Dict[str, Any]) -> Optional[Location]:
    """
    Mezcla los campos de changes en la ubicación existente.
    Lanza ValueError si se intenta cambiar un campo que no es editable.
    """
    invalid = set(changes) - set(UPDATABLE_FIELDS)
    if invalid:
        raise ValueError(f"Fields cannot be updated: {', '.join(sorted(invalid))}")

    db_location = await get_location(db, location_id)
    if db_location:
        for key, value in changes.items():
            setattr(db_location, key, value)
        await db.commit()
        await db.refresh(db_location)
    return db_location

async def toggle_location_occupancy(db: AsyncSession, location_id: int) -> Optional[Location]:
    """
    Alterna ocupada/vacía. El resto de los campos no se tocan.
    """
    db_location = await get_location(db, location_id)
    if db_location is None:
        return None
    return await update_location(db, location_id, {"is_occupied": not db_location.is_occupied})

async def delete_location(db: AsyncSession, location_id: int) -> bool:
    result = await db.execute(
        delete(Location).where(Location.id == location_id)
    )
    await db.commit()
    return result.rowcount > 0
