from sqlalchemy import Column, Integer, String, Boolean, DateTime, JSON, CheckConstraint
from sqlalchemy.orm import relationship
from app.database import Base, TimestampMixin, generate_uuid


class Business(Base, TimestampMixin):
    """
    A tenant organization using the receptionist service.

    Onboarding progress lives directly on the row: `onboarding_step` is the
    wizard position (0-7) and `onboarding_completed_at` is set once the
    business goes live.
    """
    __tablename__ = "business"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String, nullable=True)
    vertical = Column(String, nullable=True)
    address = Column(String, nullable=True)
    to_number = Column(String, unique=True, index=True, nullable=True)  # line the voice agent answers
    hours = Column(JSON, nullable=True)
    services = Column(JSON, nullable=True)
    staff = Column(JSON, nullable=True)
    faqs = Column(JSON, nullable=True)
    promos = Column(JSON, nullable=True)
    categories = Column(JSON, nullable=True)
    is_active = Column(Boolean, default=False, nullable=False)
    is_demo = Column(Boolean, default=False, nullable=False)
    demo_phone_number = Column(String, nullable=True)

    onboarding_step = Column(Integer, default=0, nullable=True)
    onboarding_completed_at = Column(DateTime(timezone=True), nullable=True)

    users = relationship("User", back_populates="business", cascade="all, delete-orphan")
    programs = relationship("Program", back_populates="business", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("onboarding_step >= 0 AND onboarding_step <= 7", name="ck_business_onboarding_step"),
    )
