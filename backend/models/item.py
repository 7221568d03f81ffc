# backend/models/item.py
import uuid
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base
from utils.clock import utcnow

# Model Item
# A single stock-keeping unit. Quantity is only changed through the movement ledger;
# `version` is bumped on every write so concurrent read-modify-write cycles are detected.
class Item(Base):
    __tablename__ = "items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    sku = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False, default="")

    quantity = Column(Integer, CheckConstraint("quantity >= 0", name="ck_items_quantity_non_negative"), nullable=False, default=0)
    location_id = Column(String(36), ForeignKey("locations.id"), nullable=True, index=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    version = Column(Integer, nullable=False)

    location = relationship("Location", back_populates="items")

    __mapper_args__ = {"version_id_col": version}
