from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from wms.dependencies import get_db
from wms.schemas.layout import Layout, LayoutCreate, LayoutGrid
from wms.schemas.group import Group
from wms.schemas.location import Location
from wms.services import group_service, layout_service, location_service

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=Layout, status_code=201)
async def create_layout_endpoint(layout: LayoutCreate, db: AsyncSession = Depends(get_db)):
    """Crea un nuevo layout."""
    try:
        layout_id = await layout_service.create_layout(db, layout.name, layout.rows, layout.columns)
    except SQLAlchemyError as e:
        logger.error(f"❌ Error creando layout: {e}")
        raise HTTPException(status_code=500, detail="Failed to create layout")
    return await layout_service.get_layout_by_id(db, layout_id)

@router.get("/", response_model=List[Layout])
async def read_layouts(db: AsyncSession = Depends(get_db)):
    """Obtiene todos los layouts, el más reciente primero."""
    return await layout_service.get_layouts(db)

@router.get("/{layout_id}", response_model=Layout)
async def read_layout(layout_id: int, db: AsyncSession = Depends(get_db)):
    db_layout = await layout_service.get_layout_by_id(db, layout_id)
    if db_layout is None:
        raise HTTPException(status_code=404, detail="Layout not found")
    return db_layout

@router.get("/{layout_id}/grid", response_model=LayoutGrid)
async def read_layout_grid(layout_id: int, db: AsyncSession = Depends(get_db)):
    """Grilla del layout con sus grupos y ubicaciones, para la vista de visualización."""
    grid = await layout_service.get_layout_grid(db, layout_id)
    if grid is None:
        raise HTTPException(status_code=404, detail="Layout not found")
    return grid

@router.get("/{layout_id}/groups", response_model=List[Group])
async def read_layout_groups(layout_id: int, db: AsyncSession = Depends(get_db)):
    return await group_service.get_groups_by_layout_id(db, layout_id)

@router.get("/{layout_id}/locations", response_model=List[Location])
async def read_layout_locations(layout_id: int, db: AsyncSession = Depends(get_db)):
    return await location_service.get_locations_by_layout_id(db, layout_id)

@router.delete("/{layout_id}", status_code=204)
async def delete_layout_endpoint(layout_id: int, db: AsyncSession = Depends(get_db)):
    """Elimina un layout con todos sus grupos y ubicaciones."""
    try:
        deleted = await layout_service.delete_layout(db, layout_id)
    except SQLAlchemyError as e:
        logger.error(f"❌ Error eliminando layout {layout_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete layout")
    if not deleted:
        raise HTTPException(status_code=404, detail="Layout not found")
