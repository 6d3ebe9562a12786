from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from wms.dependencies import get_db
from wms.schemas.integrity import IntegrityReport
from wms.services import integrity_service

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/", response_model=IntegrityReport)
async def read_integrity(db: AsyncSession = Depends(get_db)):
    """Revisa huérfanos y layout_id desalineados."""
    return await integrity_service.scan_integrity(db)

@router.post("/repair", response_model=IntegrityReport)
async def repair_integrity_endpoint(db: AsyncSession = Depends(get_db)):
    try:
        return await integrity_service.repair_integrity(db)
    except SQLAlchemyError as e:
        logger.error(f"❌ Error reparando integridad: {e}")
        raise HTTPException(status_code=500, detail="Failed to repair integrity")
