from pydantic import BaseModel
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

# Labels used in validation messages when the field name alone reads badly
FIELD_LABELS = {
    "case_id": "Case ID",
    "email": "Email",
}


def field_label(field: str) -> str:
    if field in FIELD_LABELS:
        return FIELD_LABELS[field]
    return field.replace("_", " ").capitalize()


def require_text(value: Optional[str], field: str, partial: bool = False) -> str:
    """Strip ``value`` and reject it when nothing is left.

    ``partial`` selects the wording used by update payloads, where the field
    was supplied but blank.
    """
    label = field_label(field)
    value = (value or "").strip()
    if not value:
        if partial:
            raise ValueError(f"{label} cannot be empty")
        raise ValueError(f"{label} is required")
    return value


class APIResponse(BaseModel, Generic[T]):
    """Envelope returned by every endpoint"""
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
