from pydantic import BaseModel, Field, computed_field, field_validator
from typing import List, Optional
from datetime import datetime
from wms.schemas.group import Group
from wms.schemas.location import Location

class LayoutBase(BaseModel):
    name: str
    rows: int
    columns: int

class LayoutCreate(LayoutBase):
    name: str = Field(..., min_length=1, max_length=100)
    rows: int = Field(..., ge=1, description="Filas de la grilla del layout")
    columns: int = Field(..., ge=1, description="Columnas de la grilla del layout")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Layout name is required")
        return value

# Las respuestas no repiten las validaciones de entrada: muestran lo que haya guardado
class Layout(LayoutBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True

# ----------------------------
# Grilla derivada para la vista de visualización
# ----------------------------

class OccupancyStats(BaseModel):
    occupied: int = 0
    total: int = 0

    @computed_field
    @property
    def empty(self) -> int:
        return self.total - self.occupied

    @computed_field
    @property
    def occupancy_rate(self) -> int:
        # Porcentaje redondeado, 0 si no hay ubicaciones
        if self.total == 0:
            return 0
        return round(self.occupied / self.total * 100)

class GridGroup(Group, OccupancyStats):
    locations: List[Location] = []

class GridCell(BaseModel):
    row: int      # 1-based
    column: int   # 1-based
    group: Optional[GridGroup] = None

class LayoutGrid(OccupancyStats):
    layout: Layout
    cells: List[List[GridCell]]
    unplaced_groups: List[GridGroup] = []
