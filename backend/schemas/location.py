from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class LocationCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    description: str = ""


class LocationUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None


class LocationOut(BaseModel):
    id: str
    name: str
    description: str
    created_at: datetime
    item_count: int = 0

    model_config = ConfigDict(from_attributes=True)
