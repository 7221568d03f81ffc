# backend/routes/items.py
from typing import Optional, List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from config import settings
from database import get_db
from models.item import Item
from models.location import Location
from models.users import User
from utils import errors
from utils.audit import write_log, client_ip
from utils.clock import utcnow
from utils.permissions import Permission
from utils.tokenJWT import permission_required
import schemas.item as item_schemas

router = APIRouter(prefix="/items", tags=["Items"])

NO_LOCATION = "Sin ubicación"


# ---- HELPERS ----
def _norm_sku(sku: Optional[str]) -> Optional[str]:
    if sku is None:
        return None
    s = sku.strip().upper()
    return s if s else None

def stock_status(quantity: int, threshold: int = None) -> str:
    threshold = settings.LOW_STOCK_THRESHOLD if threshold is None else threshold
    if quantity == 0:
        return "sin_stock"
    if quantity < threshold:
        return "bajo"
    return "normal"

def serialize_item(item: Item) -> item_schemas.ItemOut:
    return item_schemas.ItemOut(
        id=item.id,
        sku=item.sku,
        name=item.name,
        description=item.description or "",
        quantity=item.quantity,
        location_id=item.location_id,
        location_name=item.location.name if item.location else NO_LOCATION,
        stock_status=stock_status(item.quantity),
        created_at=item.created_at,
        updated_at=item.updated_at,
        version=item.version,
    )

def _get_item_or_404(db: Session, item_id: str) -> Item:
    item = db.query(Item).filter(Item.id == item_id).first()
    if not item:
        raise errors.ItemNotFound()
    return item

def _check_location(db: Session, location_id: Optional[str]) -> None:
    if location_id and not db.query(Location).filter(Location.id == location_id).first():
        raise errors.LocationNotFound()


# =========================
# LIST
# =========================
@router.get("", response_model=item_schemas.ItemListPage)
def list_items(
    q: Optional[str] = Query(None, description="Busca por nombre, SKU o descripción"),
    location_id: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=1000),
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.ITEMS_READ)),
):
    query = db.query(Item)
    if q:
        like = f"%{q}%"
        query = query.filter(or_(Item.name.ilike(like), Item.sku.ilike(like), Item.description.ilike(like)))
    if location_id:
        query = query.filter(Item.location_id == location_id)

    total = query.count()
    items: List[Item] = (query
                         .order_by(Item.name.asc())
                         .offset((page - 1) * page_size)
                         .limit(page_size)
                         .all())

    return {"items": [serialize_item(i) for i in items], "total": total, "page": page, "page_size": page_size}


# =========================
# SINGLE ITEM
# =========================
@router.get("/{item_id}", response_model=item_schemas.ItemOut)
def get_item(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.ITEMS_READ)),
):
    return serialize_item(_get_item_or_404(db, item_id))


# =========================
# CREATE
# =========================
@router.post("", response_model=item_schemas.ItemOut, status_code=201)
def create_item(
    payload: item_schemas.ItemCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.ITEMS_WRITE)),
):
    sku = _norm_sku(payload.sku)
    if not sku:
        raise errors.ValidationError("El SKU es obligatorio")
    if db.query(Item).filter(Item.sku == sku).first():
        raise errors.Conflict("El SKU ya existe")
    _check_location(db, payload.location_id)

    item = Item(
        sku=sku,
        name=payload.name.strip(),
        description=payload.description,
        quantity=payload.quantity,
        location_id=payload.location_id,
    )
    db.add(item)
    db.commit()
    db.refresh(item)

    write_log(
        db, user_id=current_user.id, action="ITEM_CREATE", resource="items",
        status="SUCCESS", ip=client_ip(request), meta={"id": item.id, "sku": item.sku}
    )
    return serialize_item(item)


# =========================
# PARTIAL EDIT (PATCH)
# =========================
@router.patch("/{item_id}", response_model=item_schemas.ItemOut)
def update_item(
    item_id: str,
    payload: item_schemas.ItemUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.ITEMS_WRITE)),
):
    item = _get_item_or_404(db, item_id)
    changes = payload.model_dump(exclude_unset=True)

    if "sku" in changes:
        sku = _norm_sku(changes["sku"])
        if not sku:
            raise errors.ValidationError("El SKU es obligatorio")
        if sku != item.sku:
            conflict = db.query(Item).filter(Item.sku == sku, Item.id != item.id).first()
            if conflict:
                raise errors.Conflict("El SKU ya existe")
        item.sku = sku
    if changes.get("name") is not None:
        item.name = changes["name"].strip()
    if changes.get("description") is not None:
        item.description = changes["description"]
    if "location_id" in changes:
        _check_location(db, changes["location_id"])
        item.location_id = changes["location_id"]

    item.updated_at = utcnow()
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        raise errors.Conflict("El item fue modificado por otro usuario, vuelva a intentarlo")
    db.refresh(item)

    write_log(
        db, user_id=current_user.id, action="ITEM_UPDATE", resource="items",
        status="SUCCESS", ip=client_ip(request), meta={"id": item.id, "fields": sorted(changes)}
    )
    return serialize_item(item)


# =========================
# DELETE
# =========================
@router.delete("/{item_id}")
def delete_item(
    item_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.ITEMS_DELETE)),
):
    item = _get_item_or_404(db, item_id)
    iid, sku = item.id, item.sku
    # Movement logs keep pointing at the removed id
    db.delete(item)
    db.commit()
    write_log(db, user_id=current_user.id, action="ITEM_DELETE", resource="items",
              status="SUCCESS", ip=client_ip(request), meta={"id": iid, "sku": sku})
    return {"message": f"Item {sku} eliminado", "id": iid}
