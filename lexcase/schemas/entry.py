"""Schemas shared by notes and speeches, which have the same shape."""

from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional
from lexcase.schemas.common import require_text
from lexcase.schemas.user import UserSummary

class EntryCreate(BaseModel):
    case_id: str
    title: str
    content: str

    @field_validator("case_id", "title", "content")
    @classmethod
    def text_required(cls, value: str, info) -> str:
        return require_text(value, info.field_name)

class EntryUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    # Ownership fields; changing them is refused by the router
    case_id: Optional[str] = None
    created_by: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def text_not_empty(cls, value: Optional[str], info) -> str:
        return require_text(value, info.field_name, partial=True)

class EntryResponse(BaseModel):
    id: str
    case_id: str
    title: str
    content: str
    created_by: str
    author: Optional[UserSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
