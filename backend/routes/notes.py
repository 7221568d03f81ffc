# backend/routes/notes.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.note import Note, NoteStatus, NoteType
from models.users import User
from utils import errors
from utils.audit import write_log, client_ip
from utils.clock import utcnow
from utils.permissions import Permission, has_permission
from utils.tokenJWT import permission_required
from schemas.note import NoteCreate, NoteList, NoteOut, NoteReview

router = APIRouter(prefix="/notes", tags=["Notes"])


def _get_note_or_404(db: Session, note_id: str) -> Note:
    note = db.query(Note).filter(Note.id == note_id).first()
    if not note:
        raise errors.NoteNotFound()
    return note


@router.get("", response_model=NoteList)
def list_notes(
    status_filter: Optional[NoteStatus] = Query(None, alias="status"),
    type_filter: Optional[NoteType] = Query(None, alias="type"),
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.NOTES_WRITE)),
):
    query = db.query(Note)
    if status_filter:
        query = query.filter(Note.status == status_filter)
    if type_filter:
        query = query.filter(Note.type == type_filter)
    notes = query.order_by(Note.created_at.desc()).all()

    # Counters ignore the filters
    pending = db.query(Note).filter(Note.status == NoteStatus.PENDIENTE).count()
    pending_warnings = (db.query(Note)
                        .filter(Note.status == NoteStatus.PENDIENTE, Note.type == NoteType.ADVERTENCIA)
                        .count())

    return {"items": notes, "total": len(notes), "pending": pending, "pending_warnings": pending_warnings}


@router.post("", response_model=NoteOut, status_code=status.HTTP_201_CREATED)
def create_note(
    payload: NoteCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.NOTES_WRITE)),
):
    note = Note(
        type=payload.type,
        title=payload.title.strip(),
        message=payload.message,
        status=NoteStatus.PENDIENTE,
        created_by=current_user.id,
        created_by_username=current_user.username,
    )
    db.add(note)
    db.commit()
    db.refresh(note)

    write_log(db, user_id=current_user.id, action="NOTE_CREATE", resource="notes", status="SUCCESS",
              ip=client_ip(request), meta={"id": note.id, "type": note.type.value})
    return note


# Staff review: set status and optional response
@router.patch("/{note_id}/review", response_model=NoteOut)
def review_note(
    note_id: str,
    payload: NoteReview,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.NOTES_REVIEW)),
):
    note = _get_note_or_404(db, note_id)
    note.status = payload.status
    note.response = payload.response
    note.reviewed_by = current_user.id
    note.reviewed_by_username = current_user.username
    note.reviewed_at = utcnow()
    db.commit()
    db.refresh(note)

    write_log(db, user_id=current_user.id, action="NOTE_REVIEW", resource="notes", status="SUCCESS",
              ip=client_ip(request), meta={"id": note.id, "status": note.status.value})
    return note


# Authors may delete their own notes; moderators any note
@router.delete("/{note_id}")
def delete_note(
    note_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.NOTES_WRITE)),
):
    note = _get_note_or_404(db, note_id)
    if note.created_by != current_user.id and not has_permission(current_user.role, Permission.NOTES_MODERATE):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Solo el autor o un administrador puede eliminar la nota")

    db.delete(note)
    db.commit()
    write_log(db, user_id=current_user.id, action="NOTE_DELETE", resource="notes", status="SUCCESS",
              ip=client_ip(request), meta={"id": note_id})
    return {"message": "Nota eliminada", "id": note_id}
