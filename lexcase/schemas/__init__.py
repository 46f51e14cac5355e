from lexcase.schemas.common import APIResponse, field_label, require_text
from lexcase.schemas.user import (
    SignupRequest,
    LoginRequest,
    GoogleAuthRequest,
    UserSummary,
    UserPublic,
    AuthResponse,
    ProfileResponse,
)
from lexcase.schemas.case import CaseCreate, CaseResponse, CaseUpdate
from lexcase.schemas.entry import EntryCreate, EntryUpdate, EntryResponse
from lexcase.schemas.document import DocumentResponse

__all__ = [
    "APIResponse",
    "field_label",
    "require_text",
    "SignupRequest",
    "LoginRequest",
    "GoogleAuthRequest",
    "UserSummary",
    "UserPublic",
    "AuthResponse",
    "ProfileResponse",
    "CaseCreate",
    "CaseResponse",
    "CaseUpdate",
    "EntryCreate",
    "EntryUpdate",
    "EntryResponse",
    "DocumentResponse",
]
