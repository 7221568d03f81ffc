# backend/schemas/stock.py
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import List

from models.movement import MovementType
from schemas.item import ItemOut

# Request to record a movement. For ajuste, quantity is the new absolute stock.
class StockMovementCreate(BaseModel):
    type: MovementType
    item_id: str
    quantity: int = Field(ge=0)

# Schema for returning ledger entries
class StockMovementResponse(BaseModel):
    id: str
    type: MovementType
    quantity_change: int
    timestamp: datetime
    user_id: str
    item_id: str
    username: str
    item_name: str

    model_config = ConfigDict(from_attributes=True)

# Result of an accepted movement: the updated item and its ledger entry
class StockMovementResult(BaseModel):
    item: ItemOut
    log: StockMovementResponse

# Paginated response for stock movement history
class StockMovementPage(BaseModel):
    items: List[StockMovementResponse]
    total: int
    page: int
    page_size: int
