from pydantic_settings import BaseSettings
from wms.schemas.group import AddressFormat

class Settings(BaseSettings):
    # Base de Datos (SQLite embebida, un archivo por instalación)
    DATABASE_URL: str = "sqlite+aiosqlite:///./wms.db"
    DATABASE_ECHO: bool = False

    # Formato de dirección por defecto para nuevas ubicaciones: "ROW-COL" o "LETTER-NUMBER"
    DEFAULT_ADDRESS_FORMAT: AddressFormat = AddressFormat.ROW_COL

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False  # No distingue mayúsculas/minúsculas

settings = Settings()
