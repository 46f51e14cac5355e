from sqlalchemy import Column, String, Enum
from lexcase.models.base import Base, TimestampMixin
import enum

class AuthProvider(str, enum.Enum):
    LOCAL = "local"
    GOOGLE = "google"

class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String)  # None for Google-only accounts
    google_id = Column(String, unique=True, index=True)
    avatar = Column(String, default="", nullable=False)
    auth_provider = Column(Enum(AuthProvider), default=AuthProvider.LOCAL, nullable=False)

    def can_use_password(self) -> bool:
        return bool(self.password_hash)
