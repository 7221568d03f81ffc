# utils/tokenJWT.py
from jose import jwt, JWTError
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.users import User
from utils.permissions import Permission, has_permission

# Authorization scheme; a missing header is reported as 401 below, not by the scheme
bearer_scheme = HTTPBearer(auto_error=False)

# Generate a signed access token for a user
def create_access_token(user: User, expires_delta: timedelta = None) -> str:
    role = user.role.value if hasattr(user.role, "value") else user.role
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {
        "userId": user.id,
        "username": user.username,
        "role": role,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

# Decode and validate a token; None when the signature is wrong, the payload is garbage or it expired
def verify_token(token: str) -> Optional[dict]:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if not payload.get("userId"):
        return None
    return {"userId": payload["userId"], "username": payload.get("username"), "role": payload.get("role")}

# Retrieve the currently authenticated user based on the bearer token
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="No autenticado",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    payload = verify_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    # Role is always read from the database, not trusted from the token
    user = db.query(User).filter(User.id == payload["userId"]).first()
    if user is None:
        raise credentials_exception
    return user

# Dependency factory for capability checks
def permission_required(*permissions: Permission):
    def _checker(current_user: User = Depends(get_current_user)) -> User:
        if not all(has_permission(current_user.role, p) for p in permissions):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="No tiene permisos para esta acción"
            )
        return current_user
    return _checker
