# backend/routes/locations.py
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy import func
from sqlalchemy.orm import Session

from database import get_db
from models.item import Item
from models.location import Location
from models.users import User
from utils import errors
from utils.audit import write_log, client_ip
from utils.permissions import Permission
from utils.tokenJWT import permission_required
from schemas.location import LocationCreate, LocationUpdate, LocationOut

router = APIRouter(prefix="/locations", tags=["Locations"])


def _get_location_or_404(db: Session, location_id: str) -> Location:
    loc = db.query(Location).filter(Location.id == location_id).first()
    if not loc:
        raise errors.LocationNotFound()
    return loc

def _item_count(db: Session, location_id: str) -> int:
    return db.query(func.count(Item.id)).filter(Item.location_id == location_id).scalar() or 0

def _to_out(db: Session, loc: Location) -> LocationOut:
    out = LocationOut.model_validate(loc)
    out.item_count = _item_count(db, loc.id)
    return out


@router.get("", response_model=List[LocationOut])
def list_locations(
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.LOCATIONS_READ)),
):
    counts = dict(
        db.query(Item.location_id, func.count(Item.id))
        .filter(Item.location_id.isnot(None))
        .group_by(Item.location_id)
        .all()
    )
    result = []
    for loc in db.query(Location).order_by(Location.name.asc()).all():
        out = LocationOut.model_validate(loc)
        out.item_count = counts.get(loc.id, 0)
        result.append(out)
    return result


@router.get("/{location_id}", response_model=LocationOut)
def get_location(
    location_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.LOCATIONS_READ)),
):
    return _to_out(db, _get_location_or_404(db, location_id))


@router.post("", response_model=LocationOut, status_code=201)
def create_location(
    payload: LocationCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.LOCATIONS_WRITE)),
):
    loc = Location(name=payload.name.strip(), description=payload.description)
    db.add(loc)
    db.commit()
    db.refresh(loc)

    write_log(db, user_id=current_user.id, action="LOCATION_CREATE", resource="locations",
              status="SUCCESS", ip=client_ip(request), meta={"id": loc.id, "name": loc.name})
    return _to_out(db, loc)


@router.patch("/{location_id}", response_model=LocationOut)
def update_location(
    location_id: str,
    payload: LocationUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.LOCATIONS_WRITE)),
):
    loc = _get_location_or_404(db, location_id)

    # Update fields if provided in the payload
    if payload.name is not None:
        loc.name = payload.name.strip()
    if payload.description is not None:
        loc.description = payload.description

    db.commit()
    db.refresh(loc)

    write_log(db, user_id=current_user.id, action="LOCATION_UPDATE", resource="locations",
              status="SUCCESS", ip=client_ip(request), meta={"id": loc.id})
    return _to_out(db, loc)


@router.delete("/{location_id}")
def delete_location(
    location_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.LOCATIONS_WRITE)),
):
    loc = _get_location_or_404(db, location_id)

    # Items must be moved elsewhere first
    in_use = _item_count(db, loc.id)
    if in_use:
        raise errors.Conflict(f"La ubicación tiene {in_use} items asignados")

    name = loc.name
    db.delete(loc)
    db.commit()
    write_log(db, user_id=current_user.id, action="LOCATION_DELETE", resource="locations",
              status="SUCCESS", ip=client_ip(request), meta={"id": location_id, "name": name})
    return {"message": f"Ubicación {name} eliminada", "id": location_id}
