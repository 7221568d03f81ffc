# backend/models/movement.py
import enum
import uuid
from sqlalchemy import Column, Integer, String, DateTime, Enum
from database import Base
from utils.clock import utcnow

# Kinds of stock movement
class MovementType(str, enum.Enum):
    ENTRADA = "entrada"  # stock in
    SALIDA = "salida"    # stock out
    AJUSTE = "ajuste"    # absolute correction

# Append-only ledger entry. item_id/user_id are soft references: deleting an item
# or a user keeps its history, so no foreign keys here.
class MovementLog(Base):
    __tablename__ = "movement_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    type = Column(
        Enum(MovementType, name="movementtype", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True,
    )
    # Signed change applied to the item quantity
    quantity_change = Column(Integer, nullable=False)
    timestamp = Column(DateTime, nullable=False, default=utcnow, index=True)

    user_id = Column(String(36), nullable=False, index=True)
    item_id = Column(String(36), nullable=False, index=True)

    # Snapshots taken when the movement was recorded
    username = Column(String, nullable=False)
    item_name = Column(String, nullable=False)
