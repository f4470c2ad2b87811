import enum
from sqlalchemy import Column, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base, TimestampMixin, generate_uuid


class UserRole(str, enum.Enum):
    owner = "owner"
    admin = "admin"
    staff = "staff"


class User(Base, TimestampMixin):
    __tablename__ = "user"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    business_id = Column(String(36), ForeignKey("business.id", ondelete="CASCADE"), nullable=False, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=True)  # null until an invited user sets one
    full_name = Column(String, nullable=True)
    role = Column(String, nullable=False, default=UserRole.staff.value)
    owner_onboarding_completed = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True)

    business = relationship("Business", back_populates="users")
