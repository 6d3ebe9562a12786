from typing import AsyncGenerator
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from wms.core.database import WMSDatabase

def get_store(request: Request) -> WMSDatabase:
    return request.app.state.store

async def get_db(store: WMSDatabase = Depends(get_store)) -> AsyncGenerator[AsyncSession, None]:
    # Una sesión por solicitud
    async with store.session() as db:
        yield db
