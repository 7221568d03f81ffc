# backend/routes/stock.py
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import Optional

from database import get_db
from models.movement import MovementType
from models.users import User
from routes.items import serialize_item
from services import ledger
from utils.audit import write_log, client_ip
from utils.permissions import Permission
from utils.tokenJWT import permission_required
import schemas.stock as stock_schemas

router = APIRouter(tags=["Stock"])


@router.get("/movements", response_model=stock_schemas.StockMovementPage)
def list_movements(
    q: Optional[str] = Query(None, description="Item o usuario"),
    type: Optional[MovementType] = Query(None),
    item_id: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.MOVEMENTS_READ)),
):
    rows, total = ledger.list_movements(db, movement_type=type, item_id=item_id, q=q, page=page, page_size=page_size)
    return {"items": rows, "total": total, "page": page, "page_size": page_size}


# Record an entrada / salida / ajuste
@router.post("/movements", response_model=stock_schemas.StockMovementResult, status_code=201)
def create_movement(
    payload: stock_schemas.StockMovementCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.MOVEMENTS_WRITE)),
):
    item, log = ledger.apply_movement(
        db,
        payload.type,
        payload.item_id,
        payload.quantity,
        actor_id=current_user.id,
        actor_username=current_user.username,
    )

    result = {"item": serialize_item(item), "log": stock_schemas.StockMovementResponse.model_validate(log)}
    write_log(db, user_id=current_user.id, action="STOCK_MOVEMENT", resource="stock", status="SUCCESS",
              ip=client_ip(request), meta={"log_id": result["log"].id, "type": payload.type.value,
                                           "item_id": payload.item_id, "change": result["log"].quantity_change})
    return result
