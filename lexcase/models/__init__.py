from .base import Base, TimestampMixin
from .user import User, AuthProvider
from .case import Case, CaseStatus
from .entry import CaseChildMixin, Note, Speech, Document

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "AuthProvider",
    "Case",
    "CaseStatus",
    "CaseChildMixin",
    "Note",
    "Speech",
    "Document",
]
