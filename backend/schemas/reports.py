# schemas/reports.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel

from schemas.stock import StockMovementResponse

# Schemas for low stock alerting
class LowStockItem(BaseModel):
    item_id: str
    sku: str
    name: str
    quantity: int
    location_name: Optional[str] = None

class LowStockPage(BaseModel):
    items: List[LowStockItem]
    total: int
    page: int
    page_size: int
    threshold: int

# Totals over the report window
class MovementSummary(BaseModel):
    total_entradas: int
    total_salidas: int
    total_ajustes: int
    count_entradas: int
    count_salidas: int
    count_ajustes: int
    count: int

class MovementReport(BaseModel):
    hours: int
    date_from: datetime
    date_to: datetime
    summary: MovementSummary
    items: List[StockMovementResponse]
