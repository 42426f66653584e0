"""
CRUD operations for notes
Every query is scoped to the owning user's email
"""
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import desc
from sqlalchemy.orm import Session

from devfeed.models import Note
from devfeed.schemas import NoteCreate, NoteOrder, NoteUpdate


def get_notes(
    db: Session,
    user_email: str,
    page: int = 1,
    limit: int = 20,
) -> Tuple[List[Note], int]:
    """
    Get one page of a user's notes and the user's total note count
    Ordered by explicit order, then most recently updated
    """
    query = db.query(Note).filter(Note.user_email == user_email)
    total = query.count()
    notes = (
        query
        .order_by(Note.order, desc(Note.updated_at), desc(Note.id))
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return notes, total


def get_note(db: Session, user_email: str, note_id: int) -> Optional[Note]:
    """
    Get a note by ID, only if it belongs to the user
    """
    return (
        db.query(Note)
        .filter(Note.id == note_id, Note.user_email == user_email)
        .first()
    )


def count_notes_created_since(db: Session, user_email: str, since: datetime) -> int:
    return (
        db.query(Note)
        .filter(Note.user_email == user_email, Note.created_at >= since)
        .count()
    )


def start_of_utc_day(now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)


def create_note(db: Session, user_email: str, note: NoteCreate) -> Note:
    db_note = Note(
        user_email=user_email,
        title=note.title,
        content=note.content,
        order=note.order,
    )
    db.add(db_note)
    db.commit()
    db.refresh(db_note)
    return db_note


def update_note(db: Session, db_note: Note, changes: NoteUpdate) -> Note:
    """
    Apply the fields present in the update
    """
    for field, value in changes.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(db_note, field, value)
    db.commit()
    db.refresh(db_note)
    return db_note


def delete_note(db: Session, db_note: Note) -> None:
    db.delete(db_note)
    db.commit()


def reorder_notes(db: Session, user_email: str, positions: Iterable[NoteOrder]) -> int:
    """
    Set the order of several notes at once
    Notes not owned by the user (or missing) are skipped; returns how many changed
    """
    wanted = {item.id: item.order for item in positions}
    if not wanted:
        return 0

    notes = (
        db.query(Note)
        .filter(Note.user_email == user_email, Note.id.in_(wanted.keys()))
        .all()
    )
    for note in notes:
        note.order = wanted[note.id]
    db.commit()
    return len(notes)
