from sqlalchemy import Column, DateTime, func
from sqlalchemy.orm import DeclarativeBase
from datetime import datetime, timezone


def utcnow() -> datetime:
    # Naive UTC with microseconds; SQLite's CURRENT_TIMESTAMP only has seconds
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all models"""
    pass

class TimestampMixin:
    """Mixin to add created_at and updated_at timestamps"""
    created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False)
