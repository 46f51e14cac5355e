from sqlalchemy import Column, String, Text, Integer, ForeignKey, select
from sqlalchemy.orm import declared_attr
from lexcase.models.base import Base, TimestampMixin
from lexcase.models.case import Case


class CaseChildMixin:
    """Records attached to a Case and owned through it.

    ``case_id`` carries no foreign key: deleting a Case leaves its
    dependents in place unless the caller removes them.
    """

    @declared_attr
    def case_id(cls):
        return Column(String, nullable=False, index=True)

    @classmethod
    def owned_by(cls, user_id: str):
        """Select records whose parent case belongs to ``user_id``."""
        return (
            select(cls)
            .join(Case, Case.id == cls.case_id)
            .where(Case.lawyer_id == user_id)
        )


class Note(Base, CaseChildMixin, TimestampMixin):
    __tablename__ = "notes"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    created_by = Column(String, ForeignKey("users.id"), nullable=False)


class Speech(Base, CaseChildMixin, TimestampMixin):
    __tablename__ = "speeches"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    created_by = Column(String, ForeignKey("users.id"), nullable=False)


class Document(Base, CaseChildMixin, TimestampMixin):
    __tablename__ = "documents"

    id = Column(String, primary_key=True)
    file_name = Column(String, nullable=False)
    file_path = Column(String, nullable=False)  # Local file path
    file_url = Column(String, nullable=False)
    file_size = Column(Integer, nullable=False)
    uploaded_by = Column(String, ForeignKey("users.id"), nullable=False)
