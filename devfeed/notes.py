"""
Notes API: per-user CRUD, scoped by the X-User-Email header.
"""
import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from devfeed import crud, schemas
from devfeed.db import get_db

logger = logging.getLogger("devfeed.notes")

router = APIRouter(prefix="/api/notes", tags=["notes"])


def require_user_email(
    x_user_email: Optional[str] = Header(None, alias="X-User-Email"),
) -> str:
    """Caller identity; every notes operation needs one."""
    if x_user_email is None or not x_user_email.strip():
        raise HTTPException(status_code=400, detail="User email is required")
    return x_user_email.strip()


def _get_owned_note(db: Session, user_email: str, note_id: int):
    note = crud.get_note(db, user_email, note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return note


@router.get("", response_model=schemas.NotesPage)
def list_notes(
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(20, ge=1, le=100, description="Notes per page"),
    user_email: str = Depends(require_user_email),
    db: Session = Depends(get_db),
):
    """List the caller's notes, ordered by position then most recent."""
    notes, total = crud.get_notes(db, user_email, page=page, limit=limit)
    return {
        "notes": notes,
        "page": page,
        "limit": limit,
        "total": total,
        "pages": math.ceil(total / limit) if total else 0,
    }


@router.post("", response_model=schemas.Note, status_code=201)
def create_note(
    note: schemas.NoteCreate,
    request: Request,
    user_email: str = Depends(require_user_email),
    db: Session = Depends(get_db),
):
    """Create a note, subject to the per-user daily quota."""
    daily_limit = request.app.state.settings.daily_note_limit
    created_today = crud.count_notes_created_since(db, user_email, crud.start_of_utc_day())
    if created_today >= daily_limit:
        logger.info(f"Daily note limit reached ({daily_limit})")
        raise HTTPException(
            status_code=429,
            detail=f"Daily limit of {daily_limit} notes reached",
        )
    return crud.create_note(db, user_email, note)


@router.put("/reorder", response_model=schemas.ReorderResult)
def reorder_notes(
    body: schemas.NotesReorder,
    user_email: str = Depends(require_user_email),
    db: Session = Depends(get_db),
):
    """Set new positions for several of the caller's notes."""
    return {"updated": crud.reorder_notes(db, user_email, body.notes)}


@router.get("/{note_id}", response_model=schemas.Note)
def get_note(
    note_id: int,
    user_email: str = Depends(require_user_email),
    db: Session = Depends(get_db),
):
    return _get_owned_note(db, user_email, note_id)


@router.put("/{note_id}", response_model=schemas.Note)
def update_note(
    note_id: int,
    changes: schemas.NoteUpdate,
    user_email: str = Depends(require_user_email),
    db: Session = Depends(get_db),
):
    note = _get_owned_note(db, user_email, note_id)
    return crud.update_note(db, note, changes)


@router.delete("/{note_id}", status_code=204)
def delete_note(
    note_id: int,
    user_email: str = Depends(require_user_email),
    db: Session = Depends(get_db),
):
    note = _get_owned_note(db, user_email, note_id)
    crud.delete_note(db, note)
    return Response(status_code=204)
