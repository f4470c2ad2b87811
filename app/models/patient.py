from sqlalchemy import Column, String, DateTime, ForeignKey
from app.database import Base, TimestampMixin, generate_uuid


class Patient(Base, TimestampMixin):
    __tablename__ = "patient"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    business_id = Column(String(36), ForeignKey("business.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    last_call_date = Column(DateTime(timezone=True), nullable=True)
