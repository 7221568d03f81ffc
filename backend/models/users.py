# backend/models/users.py
import uuid
from sqlalchemy import Column, String, DateTime, Enum
from database import Base
from utils.clock import utcnow
from utils.permissions import Role

# Represents a user account with authentication details and system role
class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(
        Enum(Role, name="userrole", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Role.USUARIO,
    )
    created_at = Column(DateTime, nullable=False, default=utcnow)
