from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from app.database import Base, TimestampMixin, generate_uuid


class DemoSession(Base, TimestampMixin):
    __tablename__ = "demo_session"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    session_token = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    demo_business_id = Column(String(36), ForeignKey("business.id", ondelete="SET NULL"), nullable=True)
