import logging

from sqlalchemy import event, func, select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

# Versión del esquema registrada en PRAGMA user_version
SCHEMA_VERSION = 2

# Declarar una base para los modelos de SQLAlchemy
Base = declarative_base()


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class WMSDatabase:
    """
    Manejador explícito del almacén local.
    Se crea al arrancar la aplicación y se inyecta en la API (y en los tests),
    en lugar de usar un motor global.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.engine = create_async_engine(database_url, echo=echo)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_foreign_keys)
        # Crear una fábrica de sesiones para cada solicitud
        self.SessionLocal = async_sessionmaker(
            bind=self.engine, class_=AsyncSession, autoflush=False, expire_on_commit=False
        )

    def session(self) -> AsyncSession:
        return self.SessionLocal()

    async def init(self):
        """
        Crea las tablas que falten y registra la versión del esquema.
        Si el almacén está vacío solo deja un aviso en el log; no se cargan datos de ejemplo.
        """
        # Asegura que todos los modelos estén registrados en Base.metadata
        from wms.models import layout, group, location  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            if self.engine.dialect.name == "sqlite":
                current = (await conn.execute(text("PRAGMA user_version"))).scalar()
                if current != SCHEMA_VERSION:
                    logger.info(f"Esquema actualizado de la versión {current} a la {SCHEMA_VERSION}")
                    await conn.execute(text(f"PRAGMA user_version = {SCHEMA_VERSION}"))

        async with self.session() as db:
            layout_count = (await db.execute(select(func.count()).select_from(layout.Layout))).scalar_one()

        if layout_count == 0:
            logger.info("📦 Base de datos vacía: inicializando sin datos de ejemplo")
        return self

    async def reset(self):
        """Elimina y vuelve a crear todas las tablas."""
        from wms.models import layout, group, location  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
            if self.engine.dialect.name == "sqlite":
                await conn.execute(text(f"PRAGMA user_version = {SCHEMA_VERSION}"))

    async def schema_version(self) -> int:
        async with self.engine.connect() as conn:
            return (await conn.execute(text("PRAGMA user_version"))).scalar()

    async def close(self):
        await self.engine.dispose()
