from pydantic import BaseModel, Field
from typing import Optional

class LocationBase(BaseModel):
    group_id: int
    layout_id: int
    row: int
    column: int
    address: str
    is_occupied: bool = False

class LocationCreate(LocationBase):
    row: int = Field(..., ge=0)
    column: int = Field(..., ge=0)
    address: str = Field(..., min_length=1, max_length=200)

class LocationUpdate(BaseModel):
    # Normalmente solo se cambia is_occupied desde la vista de visualización
    address: Optional[str] = Field(None, min_length=1, max_length=200)
    is_occupied: Optional[bool] = None

class Location(LocationBase):
    id: int

    class Config:
        from_attributes = True
