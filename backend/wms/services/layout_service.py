import logging
from datetime import datetime, timezone
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from wms.models.layout import Layout
from wms.models.group import Group
from wms.models.location import Location
from wms.schemas.layout import GridCell, GridGroup, Layout as LayoutSchema, LayoutGrid
from wms.schemas.location import Location as LocationSchema

logger = logging.getLogger(__name__)

async def create_layout(db: AsyncSession, name: str, rows: int, columns: int) -> int:
    """
    Crea un layout y devuelve su ID.
    No valida nada: el que llama debe garantizar nombre no vacío y filas/columnas >= 1.
    """
    db_layout = Layout(name=name, rows=rows, columns=columns, created_at=datetime.now(timezone.utc))
    db.add(db_layout)
    await db.commit()
    await db.refresh(db_layout)
    logger.info(f"📐 Layout creado: {name} ({rows}x{columns}) ID {db_layout.id}")
    return db_layout.id

async def get_layouts(db: AsyncSession) -> List[Layout]:
    """
    Obtiene todos los layouts, el más reciente primero.
    """
    result = await db.execute(
        select(Layout).order_by(Layout.created_at.desc(), Layout.id.desc())
    )
    return result.scalars().all()

async def get_layout_by_id(db: AsyncSession, layout_id: int) -> Optional[Layout]:
    result = await db.execute(
        select(Layout).where(Layout.id == layout_id)
    )
    return result.scalars().first()

async def delete_layout(db: AsyncSession, layout_id: int) -> bool:
    """
    Elimina un layout junto con sus grupos y ubicaciones.
    El orden es siempre hijo primero (ubicaciones, grupos, layout) y todo va en una sola transacción.
    """
    db_layout = await get_layout_by_id(db, layout_id)
    if not db_layout:
        return False

    group_ids = select(Group.id).where(Group.layout_id == layout_id)
    try:
        await db.execute(delete(Location).where(Location.group_id.in_(group_ids)))
        await db.execute(delete(Location).where(Location.layout_id == layout_id))
        await db.execute(delete(Group).where(Group.layout_id == layout_id))
        await db.execute(delete(Layout).where(Layout.id == layout_id))
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    logger.info(f"🗑️ Layout {layout_id} eliminado con sus grupos y ubicaciones")
    return True

async def get_layout_grid(db: AsyncSession, layout_id: int) -> Optional[LayoutGrid]:
    """
    Arma la grilla derivada de un layout: una celda por (fila, columna), con el grupo
    ubicado ahí y sus ubicaciones ordenadas por (fila, columna).
    Los grupos fuera del rango del layout se devuelven aparte en unplaced_groups.
    """
    db_layout = await get_layout_by_id(db, layout_id)
    if not db_layout:
        return None

    groups_result = await db.execute(
        select(Group).where(Group.layout_id == layout_id).order_by(Group.id)
    )
    locations_result = await db.execute(
        select(Location)
        .where(Location.layout_id == layout_id)
        .order_by(Location.group_id, Location.row, Location.column)
    )

    locations_by_group = {}
    for loc in locations_result.scalars().all():
        locations_by_group.setdefault(loc.group_id, []).append(LocationSchema.model_validate(loc))

    cells = [
        [GridCell(row=row, column=column) for column in range(1, db_layout.columns + 1)]
        for row in range(1, db_layout.rows + 1)
    ]
    unplaced = []
    occupied = total = 0

    for db_group in groups_result.scalars().all():
        group_locations = locations_by_group.get(db_group.id, [])
        grid_group = GridGroup(
            id=db_group.id,
            name=db_group.name,
            layout_id=db_group.layout_id,
            column=db_group.column,
            row=db_group.row,
            rows=db_group.rows,
            columns=db_group.columns,
            created_at=db_group.created_at,
            locations=group_locations,
            occupied=sum(1 for loc in group_locations if loc.is_occupied),
            total=len(group_locations),
        )
        occupied += grid_group.occupied
        total += grid_group.total

        in_range = 1 <= db_group.row <= db_layout.rows and 1 <= db_group.column <= db_layout.columns
        cell = cells[db_group.row - 1][db_group.column - 1] if in_range else None
        # Una celda solo admite un grupo; el resto queda sin ubicar
        if cell is None or cell.group is not None:
            unplaced.append(grid_group)
        else:
            cell.group = grid_group

    return LayoutGrid(
        layout=LayoutSchema.model_validate(db_layout),
        cells=cells,
        unplaced_groups=unplaced,
        occupied=occupied,
        total=total,
    )
