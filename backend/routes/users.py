# backend/routes/users.py
from fastapi import APIRouter, Depends, Query, Request, status
from typing import List, Optional, Literal
from sqlalchemy.orm import Session
from pydantic import BaseModel

from database import get_db
from models.users import User
from populate_db import reset_default_users
from utils import errors
from utils.audit import write_log, client_ip
from utils.hashing import get_password_hash
from utils.permissions import Permission, Role
from utils.tokenJWT import permission_required
from schemas.user import UserCreate, UserUpdate, UserResponse

router = APIRouter(prefix="/users", tags=["Users"])

# Schema for paginated user list response
class PaginatedUsersResponse(BaseModel):
    items: List[UserResponse]
    total: int
    page: int
    page_size: int


def _get_user_or_404(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise errors.UserNotFound()
    return user

def _ensure_username_free(db: Session, username: str, exclude_id: str = None) -> None:
    query = db.query(User).filter(User.username == username)
    if exclude_id:
        query = query.filter(User.id != exclude_id)
    if query.first():
        raise errors.Conflict("El nombre de usuario ya existe")


# Retrieve a list of users with filtering, sorting, and pagination
@router.get("", response_model=PaginatedUsersResponse)
def get_all_users(
    q: Optional[str] = Query(None, description="Buscar por nombre de usuario"),
    role: Optional[Role] = Query(None, description="Filtrar por rol"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: Literal["username", "role", "created_at"] = "username",
    order: Literal["asc", "desc"] = "asc",
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.USERS_MANAGE)),
):
    query = db.query(User)

    if q:
        query = query.filter(User.username.ilike(f"%{q}%"))
    if role:
        query = query.filter(User.role == role)

    sort_map = {
        "username": User.username,
        "role": User.role,
        "created_at": User.created_at,
    }
    col = sort_map.get(sort_by, User.username)
    query = query.order_by(col.asc() if order == "asc" else col.desc())

    total = query.count()
    users = query.offset((page - 1) * page_size).limit(page_size).all()

    return {"items": users, "total": total, "page": page, "page_size": page_size}


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.USERS_MANAGE)),
):
    return _get_user_or_404(db, user_id)


# Create an account with a hashed password
@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.USERS_MANAGE)),
):
    _ensure_username_free(db, payload.username)

    new_user = User(username=payload.username, password_hash=get_password_hash(payload.password), role=payload.role)
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    write_log(db, user_id=current_user.id, action="USER_CREATE", resource="users", status="SUCCESS",
              ip=client_ip(request), meta={"id": new_user.id, "username": new_user.username, "role": new_user.role.value})
    return new_user


# Partial update; password is re-hashed when present
@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    payload: UserUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.USERS_MANAGE)),
):
    user = _get_user_or_404(db, user_id)
    changes = payload.model_dump(exclude_unset=True)

    if changes.get("username") is not None:
        username = changes["username"]
        if username != user.username:
            _ensure_username_free(db, username, exclude_id=user.id)
        user.username = username
    if changes.get("password") is not None:
        user.password_hash = get_password_hash(changes["password"])
    if changes.get("role") is not None:
        user.role = changes["role"]

    db.commit()
    db.refresh(user)

    # Never put the password into the audit trail
    write_log(db, user_id=current_user.id, action="USER_UPDATE", resource="users", status="SUCCESS",
              ip=client_ip(request), meta={"id": user.id, "fields": sorted(changes)})
    return user


# Delete a user account
@router.delete("/{user_id}")
def delete_user(
    user_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.USERS_MANAGE)),
):
    user = _get_user_or_404(db, user_id)

    # Prevent self-deletion
    if user.id == current_user.id:
        raise errors.ValidationError("No puede eliminar su propia cuenta")

    username = user.username
    db.delete(user)
    db.commit()

    write_log(db, user_id=current_user.id, action="USER_DELETE", resource="users", status="SUCCESS",
              ip=client_ip(request), meta={"id": user_id, "username": username})
    return {"message": f"Usuario {username} eliminado", "id": user_id}


# Wipe all accounts and recreate admin/bodeguero/usuario
@router.post("/reset-defaults", response_model=List[UserResponse])
def reset_users(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.USERS_MANAGE)),
):
    actor_id = current_user.id
    reset_default_users(db)
    write_log(db, user_id=actor_id, action="USER_RESET", resource="users", status="SUCCESS", ip=client_ip(request))
    return db.query(User).order_by(User.username.asc()).all()
