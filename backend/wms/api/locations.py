from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from wms.dependencies import get_db
from wms.schemas.location import Location, LocationCreate, LocationUpdate
from wms.services import group_service, location_service

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=Location, status_code=201)
async def create_location_endpoint(location: LocationCreate, db: AsyncSession = Depends(get_db)):
    db_group = await group_service.get_group(db, location.group_id)
    if db_group is None:
        raise HTTPException(status_code=404, detail="Group not found")
    if db_group.layout_id != location.layout_id:
        raise HTTPException(status_code=400, detail="Location layout does not match its group")
    # Una sola ubicación por celda de la grilla del grupo
    if not (0 <= location.row < db_group.rows and 0 <= location.column < db_group.columns):
        raise HTTPException(status_code=400, detail="Location is outside the group grid")
    if await location_service.get_location_at(db, location.group_id, location.row, location.column):
        raise HTTPException(status_code=400, detail="Location cell is already taken")
    try:
        location_id = await location_service.create_location(db, **location.model_dump())
    except SQLAlchemyError as e:
        logger.error(f"❌ Error creando ubicación: {e}")
        raise HTTPException(status_code=500, detail="Failed to create location")
    return await location_service.get_location(db, location_id)

@router.get("/{location_id}", response_model=Location)
async def read_location(location_id: int, db: AsyncSession = Depends(get_db)):
    db_location = await location_service.get_location(db, location_id)
    if db_location is None:
        raise HTTPException(status_code=404, detail="Location not found")
    return db_location

@router.patch("/{location_id}", response_model=Location)
async def update_location_endpoint(location_id: int, payload: LocationUpdate, db: AsyncSession = Depends(get_db)):
    try:
        db_location = await location_service.update_location(
            db, location_id, payload.model_dump(exclude_unset=True, exclude_none=True)
        )
    except SQLAlchemyError as e:
        logger.error(f"❌ Error actualizando ubicación {location_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update location")
    if db_location is None:
        raise HTTPException(status_code=404, detail="Location not found")
    return db_location

@router.post("/{location_id}/toggle", response_model=Location)
async def toggle_location_endpoint(location_id: int, db: AsyncSession = Depends(get_db)):
    """Marca la ubicación como ocupada o vacía (lo contrario de su estado actual)."""
    try:
        db_location = await location_service.toggle_location_occupancy(db, location_id)
    except SQLAlchemyError as e:
        logger.error(f"❌ Error actualizando ubicación {location_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update location status")
    if db_location is None:
        raise HTTPException(status_code=404, detail="Location not found")
    logger.info(f"📍 Ubicación {db_location.address} marcada como {'ocupada' if db_location.is_occupied else 'vacía'}")
    return db_location

@router.delete("/{location_id}", status_code=204)
async def delete_location_endpoint(location_id: int, db: AsyncSession = Depends(get_db)):
    try:
        deleted = await location_service.delete_location(db, location_id)
    except SQLAlchemyError as e:
        logger.error(f"❌ Error eliminando ubicación {location_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete location")
    if not deleted:
        raise HTTPException(status_code=404, detail="Location not found")
