import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from sqlalchemy import text

from wms.api import groups, integrity, layouts, locations
from wms.core.config import settings
from wms.core.database import WMSDatabase
from wms.dependencies import get_store

# Configurar logging
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = WMSDatabase(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    await store.init()
    app.state.store = store
    logger.info(f"✅ Almacén abierto: {settings.DATABASE_URL}")
    try:
        yield
    finally:
        await store.close()


app = FastAPI(title="WMS Layout Manager", version="0.1.0", lifespan=lifespan)

app.include_router(layouts.router, prefix="/api/v1/layouts", tags=["layouts"])
app.include_router(groups.router, prefix="/api/v1/groups", tags=["groups"])
app.include_router(locations.router, prefix="/api/v1/locations", tags=["locations"])
app.include_router(integrity.router, prefix="/api/v1/integrity", tags=["integrity"])

@app.get("/health")
async def health(store: WMSDatabase = Depends(get_store)):
    async with store.engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    return {"status": "ok", "schema_version": await store.schema_version()}
