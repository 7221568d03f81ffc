"""
Stock ledger - applies movements to item quantities and records the audit trail.

Every accepted movement updates exactly one item and appends exactly one
MovementLog in the same transaction. The item row is versioned, so a movement
computed from a stale read is refused with Conflict instead of overwriting a
concurrent change.
"""
import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from models.item import Item
from models.movement import MovementLog, MovementType
from utils import errors
from utils.clock import utcnow

logger = logging.getLogger(__name__)


def _parse_type(movement_type) -> MovementType:
    try:
        return MovementType(movement_type)
    except ValueError:
        raise errors.ValidationError(f"Tipo de movimiento desconocido: {movement_type}")


def _validate_amount(movement_type: MovementType, amount) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise errors.ValidationError("La cantidad debe ser un número entero")
    if movement_type is MovementType.AJUSTE:
        if amount < 0:
            raise errors.ValidationError("La cantidad del ajuste no puede ser negativa")
    elif amount <= 0:
        raise errors.ValidationError("La cantidad debe ser mayor a 0")


def apply_movement(
    db: Session,
    movement_type,
    item_id: str,
    amount: int,
    actor_id: str,
    actor_username: str,
) -> Tuple[Item, MovementLog]:
    """Apply an entrada/salida/ajuste to an item and return (item, log).

    entrada adds `amount`, salida subtracts it (never below zero), ajuste sets
    the quantity to `amount`. The log's quantity_change is the signed delta.
    """
    movement_type = _parse_type(movement_type)
    _validate_amount(movement_type, amount)

    item = db.query(Item).filter(Item.id == item_id).first()
    if item is None:
        raise errors.ItemNotFound()

    previous = item.quantity
    if movement_type is MovementType.ENTRADA:
        new_quantity, change = previous + amount, amount
    elif movement_type is MovementType.SALIDA:
        if amount > previous:
            logger.warning(
                "Rejected salida of %s for item %s (%s): only %s in stock",
                amount, item.id, item.sku, previous,
            )
            raise errors.InsufficientStock()
        new_quantity, change = previous - amount, -amount
    else:
        new_quantity, change = amount, amount - previous

    now = utcnow()
    item.quantity = new_quantity
    item.updated_at = now

    log = MovementLog(
        type=movement_type,
        quantity_change=change,
        timestamp=now,
        user_id=actor_id,
        item_id=item.id,
        username=actor_username,
        item_name=item.name,
    )
    db.add(log)

    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        logger.warning("Concurrent update detected on item %s; %s discarded", item_id, movement_type.value)
        raise errors.Conflict("El item fue modificado por otro usuario, vuelva a intentarlo")

    db.refresh(item)
    db.refresh(log)
    logger.info(
        "%s on item %s by %s: %s -> %s (%+d)",
        movement_type.value, item.sku, actor_username, previous, new_quantity, change,
    )
    return item, log


def list_movements(
    db: Session,
    movement_type: Optional[MovementType] = None,
    item_id: Optional[str] = None,
    q: Optional[str] = None,
    page: int = 1,
    page_size: int = 20,
) -> Tuple[List[MovementLog], int]:
    """Newest-first page of the ledger plus the total match count."""
    query = db.query(MovementLog)
    if movement_type:
        query = query.filter(MovementLog.type == MovementType(movement_type))
    if item_id:
        query = query.filter(MovementLog.item_id == item_id)
    if q:
        like = f"%{q}%"
        query = query.filter(or_(MovementLog.item_name.ilike(like), MovementLog.username.ilike(like)))

    total = query.count()
    rows = (query
            .order_by(MovementLog.timestamp.desc(), MovementLog.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all())
    return rows, total


def recent_movements(db: Session, hours: int, now: Optional[datetime] = None) -> List[MovementLog]:
    """Movements recorded in the trailing `hours`, newest first."""
    since = (now or utcnow()) - timedelta(hours=hours)
    return (db.query(MovementLog)
            .filter(MovementLog.timestamp >= since)
            .order_by(MovementLog.timestamp.desc(), MovementLog.id.desc())
            .all())


def summarize(logs: Sequence[MovementLog]) -> Dict[str, int]:
    entradas = [log for log in logs if log.type == MovementType.ENTRADA]
    salidas = [log for log in logs if log.type == MovementType.SALIDA]
    ajustes = [log for log in logs if log.type == MovementType.AJUSTE]
    return {
        "total_entradas": sum(log.quantity_change for log in entradas),
        "total_salidas": sum(abs(log.quantity_change) for log in salidas),
        "total_ajustes": len(ajustes),
        "count_entradas": len(entradas),
        "count_salidas": len(salidas),
        "count_ajustes": len(ajustes),
        "count": len(logs),
    }
