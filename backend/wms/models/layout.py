from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from wms.core.database import Base

class Layout(Base):
    __tablename__ = "layouts"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, index=True)
    rows = Column(Integer, nullable=False)
    columns = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)

    groups = relationship("Group", back_populates="layout", passive_deletes=True)
