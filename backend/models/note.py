# backend/models/note.py
import enum
import uuid
from sqlalchemy import Column, String, Text, DateTime, Enum
from database import Base
from utils.clock import utcnow

class NoteType(str, enum.Enum):
    NOTA = "nota"
    ADVERTENCIA = "advertencia"

# Review workflow: pendiente -> revisada / resuelta
class NoteStatus(str, enum.Enum):
    PENDIENTE = "pendiente"
    REVISADA = "revisada"
    RESUELTA = "resuelta"

# Free-form note or warning left by a user for the warehouse staff
class Note(Base):
    __tablename__ = "notes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    type = Column(Enum(NoteType, name="notetype", native_enum=False, values_callable=lambda e: [m.value for m in e]), nullable=False)
    title = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    status = Column(
        Enum(NoteStatus, name="notestatus", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=NoteStatus.PENDIENTE,
        index=True,
    )

    created_by = Column(String(36), nullable=False, index=True)
    created_by_username = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    # Filled in when staff review the note
    reviewed_by = Column(String(36), nullable=True)
    reviewed_by_username = Column(String, nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    response = Column(Text, nullable=True)
