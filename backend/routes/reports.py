# routes/reports.py
from datetime import timedelta
from typing import Optional, List

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy import or_
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.item import Item
from models.users import User
from routes.items import NO_LOCATION
from services import ledger
from utils.clock import utcnow
from utils.pdf import generate_movements_pdf, report_filename
from utils.permissions import Permission
from utils.tokenJWT import permission_required
from schemas.reports import LowStockPage, LowStockItem, MovementReport

router = APIRouter(prefix="/reports", tags=["Reports"])

# -----------------------------
# 1) Movements in the trailing window
# -----------------------------
@router.get("/movements", response_model=MovementReport)
def report_movements(
    hours: int = Query(settings.REPORT_WINDOW_HOURS, ge=1, le=24 * 31, description="Ventana en horas"),
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.REPORTS_READ)),
):
    now = utcnow()
    logs = ledger.recent_movements(db, hours, now=now)
    return {
        "hours": hours,
        "date_from": now - timedelta(hours=hours),
        "date_to": now,
        "summary": ledger.summarize(logs),
        "items": logs,
    }


@router.get("/movements/pdf")
def report_movements_pdf(
    hours: int = Query(settings.REPORT_WINDOW_HOURS, ge=1, le=24 * 31),
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.REPORTS_READ)),
):
    now = utcnow()
    logs = ledger.recent_movements(db, hours, now=now)
    pdf = generate_movements_pdf(logs, ledger.summarize(logs), hours, generated_at=now)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(now)}"'},
    )

# -----------------------------
# 2) Low stock
# -----------------------------
@router.get("/low-stock", response_model=LowStockPage)
def report_low_stock(
    threshold: Optional[int] = Query(None, ge=0, description="Umbral de stock (<)"),
    q: Optional[str] = Query(None, description="Buscar por nombre/SKU"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.REPORTS_READ)),
):
    if threshold is None:
        threshold = settings.LOW_STOCK_THRESHOLD

    query = db.query(Item).filter(Item.quantity < threshold)
    if q:
        like = f"%{q}%"
        query = query.filter(or_(Item.name.ilike(like), Item.sku.ilike(like)))

    total = query.count()
    rows = (query
            .order_by(Item.quantity.asc(), Item.name.asc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all())

    items: List[LowStockItem] = [
        LowStockItem(
            item_id=i.id,
            sku=i.sku,
            name=i.name,
            quantity=i.quantity,
            location_name=i.location.name if i.location else NO_LOCATION,
        )
        for i in rows
    ]
    return {"items": items, "total": total, "page": page, "page_size": page_size, "threshold": threshold}
