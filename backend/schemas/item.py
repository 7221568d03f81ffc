# backend/schemas/item.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Literal
from datetime import datetime


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


StockStatus = Literal["sin_stock", "bajo", "normal"]


# Schema for creating a new item; the initial quantity is the only direct quantity write
class ItemCreate(ORMBase):
    model_config = ConfigDict(str_strip_whitespace=True)

    sku: str = Field(min_length=1, description="Código único del item")
    name: str = Field(min_length=1)
    description: str = ""
    quantity: int = Field(default=0, ge=0)
    location_id: Optional[str] = None


# Schema for partial item updates. Quantity is not accepted here: use stock movements.
class ItemUpdate(ORMBase):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    sku: Optional[str] = Field(None, min_length=1)
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    location_id: Optional[str] = None


class ItemOut(ORMBase):
    id: str
    sku: str
    name: str
    description: str
    quantity: int
    location_id: Optional[str] = None
    location_name: str
    stock_status: StockStatus
    created_at: datetime
    updated_at: datetime
    version: int


# Paginated response for item listings
class ItemListPage(ORMBase):
    items: List[ItemOut]
    total: int
    page: int
    page_size: int
