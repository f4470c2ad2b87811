from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from app.database import Base, TimestampMixin, generate_uuid


class Call(Base, TimestampMixin):
    __tablename__ = "call"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    business_id = Column(String(36), ForeignKey("business.id", ondelete="CASCADE"), nullable=False, index=True)
    call_id = Column(String, nullable=False)  # id assigned by the voice provider
    patient_id = Column(String(36), ForeignKey("patient.id", ondelete="SET NULL"), nullable=True)
    status = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    patient_name = Column(String, nullable=True)
    last_summary = Column(Text, nullable=True)
    started_at = Column(DateTime(timezone=True), nullable=True)
    ended_at = Column(DateTime(timezone=True), nullable=True)
