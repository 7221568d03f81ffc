from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from models.note import NoteStatus, NoteType


class NoteCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    type: NoteType = NoteType.NOTA
    title: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1)


# Staff review of a note
class NoteReview(BaseModel):
    status: NoteStatus
    response: Optional[str] = None


class NoteOut(BaseModel):
    id: str
    type: NoteType
    title: str
    message: str
    status: NoteStatus
    created_by: str
    created_by_username: str
    created_at: datetime
    reviewed_by: Optional[str] = None
    reviewed_by_username: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    response: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class NoteList(BaseModel):
    items: List[NoteOut]
    total: int
    pending: int
    pending_warnings: int
