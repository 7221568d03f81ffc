# backend/models/location.py
import uuid
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from database import Base
from utils.clock import utcnow

# Physical place where items are kept (shelf, zone, warehouse)
class Location(Base):
    __tablename__ = "locations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=utcnow)

    items = relationship("Item", back_populates="location")
