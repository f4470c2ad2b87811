from sqlalchemy import Column, String, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.database import Base, TimestampMixin, generate_uuid


class Program(Base, TimestampMixin):
    """
    A sub-line of a business (reached through a phone extension) whose
    fields override the business defaults in the voice context.
    """
    __tablename__ = "program"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    business_id = Column(String(36), ForeignKey("business.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    extension = Column(String, nullable=True)
    vertical = Column(String, nullable=True)
    address = Column(String, nullable=True)
    hours = Column(JSON, nullable=True)
    services = Column(JSON, nullable=True)
    staff = Column(JSON, nullable=True)
    faqs = Column(JSON, nullable=True)
    promos = Column(JSON, nullable=True)
    insurances = Column(JSON, nullable=True)
    description = Column(Text, nullable=True)
    settings = Column(JSON, nullable=True)

    business = relationship("Business", back_populates="programs")
