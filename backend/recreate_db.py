# recreate_db.py
import asyncio
from wms.core.config import settings
from wms.core.database import WMSDatabase

async def recreate_database():
    print(f"Conectando a {settings.DATABASE_URL} para reconstruir el esquema...")
    store = WMSDatabase(settings.DATABASE_URL)
    try:
        print("Eliminando y creando todas las tablas...")
        await store.reset()
    finally:
        await store.close()

    print("¡Esquema de base de datos reconstruido con éxito!")

if __name__ == "__main__":
    asyncio.run(recreate_database())
