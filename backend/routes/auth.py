# backend/routes/auth.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from utils.hashing import verify_password
from utils.tokenJWT import create_access_token, get_current_user
from utils.audit import write_log, client_ip
from utils.permissions import ROLE_LABELS, Role, permissions_for
from utils import errors
from models.users import User
from schemas import user as schemas
from database import get_db

router = APIRouter(tags=["Auth"])


# Authenticate user and issue a signed token
@router.post("/login", response_model=schemas.Token)
def login(payload: schemas.UserLogin, request: Request, db: Session = Depends(get_db)):
    username = payload.username.strip()
    db_user = db.query(User).filter(User.username == username).first()

    # Same answer for unknown user and wrong password
    if not db_user or not verify_password(payload.password, db_user.password_hash):
        write_log(db, user_id=(db_user.id if db_user else None), action="LOGIN", resource="auth",
                  status="FAIL", ip=client_ip(request), meta={"username": username})
        raise errors.InvalidCredentials()

    access_token = create_access_token(db_user)

    write_log(db, user_id=db_user.id, action="LOGIN", resource="auth",
              status="SUCCESS", ip=client_ip(request), meta={"username": db_user.username})
    db.refresh(db_user)

    return {"access_token": access_token, "token_type": "bearer", "user": db_user}


# Retrieve current authenticated user details and capabilities
@router.get("/me", response_model=schemas.MeResponse)
def me(current_user: User = Depends(get_current_user)):
    role = Role(current_user.role)
    return {
        "id": current_user.id,
        "username": current_user.username,
        "role": role,
        "created_at": current_user.created_at,
        "role_label": ROLE_LABELS[role],
        "permissions": sorted(p.value for p in permissions_for(role)),
    }
