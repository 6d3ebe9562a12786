from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from wms.core.database import Base

class Group(Base):
    __tablename__ = "groups"
    id = Column(Integer, primary_key=True, autoincrement=True)
    layout_id = Column(Integer, ForeignKey('layouts.id'), nullable=False, index=True)
    name = Column(String(100), nullable=False, index=True)
    column = Column(Integer, nullable=False, index=True) # posición 1-based dentro del layout
    row = Column(Integer, nullable=False, default=1, index=True)
    rows = Column(Integer, nullable=False) # tamaño de la grilla interna
    columns = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)

    layout = relationship("Layout", back_populates="groups")
    locations = relationship("Location", back_populates="group", passive_deletes=True)
