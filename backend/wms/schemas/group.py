from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from enum import Enum

class AddressFormat(str, Enum):
    ROW_COL = "ROW-COL"
    LETTER_NUMBER = "LETTER-NUMBER"

class GroupBase(BaseModel):
    name: str
    layout_id: int
    column: int
    row: int = 1
    rows: int
    columns: int

class GroupCreate(GroupBase):
    name: str = Field(..., min_length=1, max_length=100)
    column: int = Field(..., ge=1, description="Columna del layout donde se ubica el grupo (1-based)")
    row: int = Field(1, ge=1, description="Fila del layout donde se ubica el grupo (1-based)")
    rows: int = Field(..., ge=1)
    columns: int = Field(..., ge=1)
    address_format: Optional[AddressFormat] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Group name is required")
        return value

class Group(GroupBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True

class AddressPreview(BaseModel):
    name: str
    address_format: AddressFormat
    addresses: List[List[str]]
