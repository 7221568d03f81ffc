from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from utils.permissions import Role


# Usernames are stored trimmed; blank ones are rejected
def _clean_username(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("El nombre de usuario es obligatorio")
    return value

# Schema for user authentication credentials
class UserLogin(BaseModel):
    username: str
    password: str

# Schema for account creation by an administrator
class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    # bcrypt only looks at the first 72 bytes
    password: str = Field(min_length=1, max_length=72)
    role: Role = Role.USUARIO

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return _clean_username(v)

# Partial update; a new password is re-hashed
class UserUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=1, max_length=100)
    password: Optional[str] = Field(None, min_length=1, max_length=72)
    role: Optional[Role] = None

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _clean_username(v)

# Output schema for user profile details
class UserResponse(BaseModel):
    id: str
    username: str
    role: Role
    created_at: datetime

    class Config:
        from_attributes = True

# Schema for the login response
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse

# Current user plus the capabilities the UI should unlock
class MeResponse(UserResponse):
    role_label: str
    permissions: List[str]
