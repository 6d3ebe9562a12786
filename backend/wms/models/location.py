from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from wms.core.database import Base

class Location(Base):
    __tablename__ = "locations"
    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey('groups.id'), nullable=False, index=True)
    # Redundante con group.layout_id, para consultar por layout directamente
    layout_id = Column(Integer, ForeignKey('layouts.id'), nullable=False, index=True)
    row = Column(Integer, nullable=False, index=True) # 0-based dentro del grupo
    column = Column(Integer, nullable=False, index=True)
    address = Column(String(200), nullable=False, index=True)
    is_occupied = Column(Boolean, nullable=False, default=False)

    group = relationship("Group", back_populates="locations")
