import logging
from datetime import datetime, timezone
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional, Union

from wms.models.group import Group
from wms.models.location import Location
from wms.schemas.group import AddressFormat
from wms.services import layout_service
from wms.services.addressing import address_for

logger = logging.getLogger(__name__)

async def create_group(db: AsyncSession, name: str, layout_id: int, column: int, row: int, rows: int, columns: int) -> int:
    """
    Crea un grupo y devuelve su ID. Sin validación de rangos en esta capa.
    """
    db_group = Group(
        name=name,
        layout_id=layout_id,
        column=column,
        row=row,
        rows=rows,
        columns=columns,
        created_at=datetime.now(timezone.utc),
    )
    db.add(db_group)
    await db.commit()
    await db.refresh(db_group)
    return db_group.id

async def get_group(db: AsyncSession, group_id: int) -> Optional[Group]:
    result = await db.execute(
        select(Group).where(Group.id == group_id)
    )
    return result.scalars().first()

async def get_groups_by_layout_id(db: AsyncSession, layout_id: int) -> List[Group]:
    result = await db.execute(
        select(Group).where(Group.layout_id == layout_id)
    )
    return result.scalars().all()

async def delete_group(db: AsyncSession, group_id: int) -> bool:
    """
    Elimina un grupo. Primero borra sus ubicaciones y luego el grupo, en la misma transacción.
    """
    db_group = await get_group(db, group_id)
    if not db_group:
        return False
    try:
        await db.execute(delete(Location).where(Location.group_id == group_id))
        await db.execute(delete(Group).where(Group.id == group_id))
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    logger.info(f"🗑️ Grupo {group_id} eliminado con sus ubicaciones")
    return True

async def create_group_with_locations(
    db: AsyncSession,
    layout_id: int,
    name: str,
    column: int,
    rows: int,
    columns: int,
    row: int = 1,
    address_format: Union[AddressFormat, str] = AddressFormat.ROW_COL,
) -> Group:
    """
    Crea un grupo dentro de un layout y genera todas sus ubicaciones (filas x columnas),
    todas vacías, con la dirección según address_format.

    Lanza LookupError si el layout no existe y ValueError si los datos no son válidos.
    El grupo y sus ubicaciones se guardan en una sola transacción.
    """
    db_layout = await layout_service.get_layout_by_id(db, layout_id)
    if db_layout is None:
        raise LookupError(f"Layout {layout_id} not found")

    name = (name or "").strip()
    if not name:
        raise ValueError("Group name is required")
    if rows < 1 or columns < 1:
        raise ValueError("Rows and columns must be at least 1")
    if not 1 <= column <= db_layout.columns:
        raise ValueError("Selected column is out of range")
    if not 1 <= row <= db_layout.rows:
        raise ValueError("Selected row is out of range")

    db_group = Group(
        name=name,
        layout_id=layout_id,
        column=column,
        row=row,
        rows=rows,
        columns=columns,
        created_at=datetime.now(timezone.utc),
    )
    try:
        db.add(db_group)
        await db.flush() # necesitamos el ID del grupo para las ubicaciones

        for r in range(rows):
            for c in range(columns):
                db.add(Location(
                    group_id=db_group.id,
                    layout_id=layout_id,
                    row=r,
                    column=c,
                    address=address_for(name, r, c, address_format),
                    is_occupied=False,
                ))
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    await db.refresh(db_group)
    logger.info(f"✅ Grupo creado: {name} en layout {layout_id} (fila {row}, columna {column})")
    logger.info(f"   Ubicaciones generadas: {rows * columns}")
    return db_group
