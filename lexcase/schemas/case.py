from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Optional
from lexcase.models import CaseStatus
from lexcase.schemas.common import field_label, require_text

REQUIRED_TEXT_FIELDS = ("case_number", "case_title", "client_name", "court_name", "case_type")

class CaseBase(BaseModel):
    case_number: str
    case_title: str
    client_name: str
    court_name: str
    case_type: str
    filing_date: date
    status: CaseStatus = CaseStatus.PENDING
    description: str = ""

class CaseCreate(CaseBase):
    @field_validator(*REQUIRED_TEXT_FIELDS)
    @classmethod
    def text_required(cls, value: str, info) -> str:
        return require_text(value, info.field_name)

class CaseUpdate(BaseModel):
    case_number: Optional[str] = None
    case_title: Optional[str] = None
    client_name: Optional[str] = None
    court_name: Optional[str] = None
    case_type: Optional[str] = None
    filing_date: Optional[date] = None
    status: Optional[CaseStatus] = None
    description: Optional[str] = None
    # Accepted only so an attempt to reassign the case can be refused
    lawyer_id: Optional[str] = None

    @field_validator(*REQUIRED_TEXT_FIELDS)
    @classmethod
    def text_not_empty(cls, value: Optional[str], info) -> str:
        return require_text(value, info.field_name, partial=True)

    @field_validator("filing_date", "status")
    @classmethod
    def not_null(cls, value, info):
        if value is None:
            raise ValueError(f"{field_label(info.field_name)} cannot be empty")
        return value

    @field_validator("description")
    @classmethod
    def description_default(cls, value: Optional[str]) -> str:
        return value or ""

class CaseResponse(CaseBase):
    id: str
    lawyer_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
