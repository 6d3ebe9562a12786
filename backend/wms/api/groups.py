from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from wms.core.config import settings
from wms.dependencies import get_db
from wms.schemas.group import AddressFormat, AddressPreview, Group, GroupCreate
from wms.schemas.location import Location
from wms.services import group_service, location_service
from wms.services.addressing import preview_addresses

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=Group, status_code=201)
async def create_group_endpoint(group: GroupCreate, db: AsyncSession = Depends(get_db)):
    """Crea un grupo y todas sus ubicaciones."""
    address_format = group.address_format or settings.DEFAULT_ADDRESS_FORMAT
    try:
        db_group = await group_service.create_group_with_locations(
            db,
            layout_id=group.layout_id,
            name=group.name,
            column=group.column,
            row=group.row,
            rows=group.rows,
            columns=group.columns,
            address_format=address_format,
        )
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError as e:
        logger.error(f"❌ Error creando grupo: {e}")
        raise HTTPException(status_code=500, detail="Failed to create group")
    return db_group

@router.get("/preview", response_model=AddressPreview)
async def preview_group_addresses(
    name: str,
    rows: int = Query(3, ge=1),
    columns: int = Query(3, ge=1),
    address_format: Optional[AddressFormat] = None,
):
    """Vista previa de las direcciones que tendría un grupo, sin guardar nada."""
    address_format = address_format or settings.DEFAULT_ADDRESS_FORMAT
    return AddressPreview(
        name=name,
        address_format=address_format,
        addresses=preview_addresses(name, rows, columns, address_format),
    )

@router.get("/{group_id}", response_model=Group)
async def read_group(group_id: int, db: AsyncSession = Depends(get_db)):
    """Obtiene un grupo por ID."""
    db_group = await group_service.get_group(db, group_id)
    if db_group is None:
        raise HTTPException(status_code=404, detail="Group not found")
    return db_group

@router.get("/{group_id}/locations", response_model=List[Location])
async def read_group_locations(group_id: int, db: AsyncSession = Depends(get_db)):
    return await location_service.get_locations_by_group_id(db, group_id)

@router.delete("/{group_id}", status_code=204)
async def delete_group_endpoint(group_id: int, db: AsyncSession = Depends(get_db)):
    """Elimina un grupo y sus ubicaciones."""
    try:
        deleted = await group_service.delete_group(db, group_id)
    except SQLAlchemyError as e:
        logger.error(f"❌ Error eliminando grupo {group_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete group")
    if not deleted:
        raise HTTPException(status_code=404, detail="Group not found")
