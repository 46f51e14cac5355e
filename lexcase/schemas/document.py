from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from lexcase.schemas.user import UserSummary

class DocumentResponse(BaseModel):
    id: str
    case_id: str
    file_name: str
    file_url: str
    file_size: int
    uploaded_by: str
    uploader: Optional[UserSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
