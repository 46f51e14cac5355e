from sqlalchemy import Column, String, Text, Date, Enum, ForeignKey, select
from lexcase.models.base import Base, TimestampMixin
import enum

class CaseStatus(str, enum.Enum):
    PENDING = "Pending"
    ACTIVE = "Active"
    CLOSED = "Closed"
    ON_HOLD = "On Hold"

class Case(Base, TimestampMixin):
    __tablename__ = "cases"

    id = Column(String, primary_key=True)
    lawyer_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    case_number = Column(String, unique=True, nullable=False, index=True)
    case_title = Column(String, nullable=False)
    client_name = Column(String, nullable=False)
    court_name = Column(String, nullable=False)
    case_type = Column(String, nullable=False)
    filing_date = Column(Date, nullable=False)
    status = Column(
        Enum(CaseStatus, values_callable=lambda e: [m.value for m in e]),
        default=CaseStatus.PENDING,
        nullable=False,
        index=True,
    )
    description = Column(Text, default="", nullable=False)

    @classmethod
    def owned_by(cls, user_id: str):
        """Select cases whose owner is ``user_id``."""
        return select(cls).where(cls.lawyer_id == user_id)
