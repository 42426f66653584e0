"""
Pydantic schemas for the notes API
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NoteCreate(BaseModel):
    """Body for creating a note"""
    title: str = Field(..., min_length=1)
    content: str = ""
    order: int = 0


class NoteUpdate(BaseModel):
    """Partial update; omitted fields are left alone"""
    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = None
    order: Optional[int] = None


class Note(BaseModel):
    """Note response"""
    id: int
    title: str
    content: str
    order: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotesPage(BaseModel):
    """One page of a user's notes"""
    notes: List[Note]
    page: int
    limit: int
    total: int
    pages: int


class NoteOrder(BaseModel):
    id: int
    order: int


class NotesReorder(BaseModel):
    """New positions for several notes"""
    notes: List[NoteOrder]


class ReorderResult(BaseModel):
    updated: int
