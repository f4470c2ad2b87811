from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, UniqueConstraint
from app.database import Base, TimestampMixin, generate_uuid


class CalendarConnection(Base, TimestampMixin):
    """
    OAuth grant linking a business (or one of its programs) to an external calendar.
    """
    __tablename__ = "calendar_connection"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    business_id = Column(String(36), ForeignKey("business.id", ondelete="CASCADE"), nullable=False)
    program_id = Column(String(36), ForeignKey("program.id", ondelete="CASCADE"), nullable=True)
    provider = Column(String, nullable=False, default="google")
    calendar_id = Column(String, nullable=False, default="primary")
    email = Column(String, nullable=True)
    access_token = Column(String, nullable=False)
    refresh_token = Column(String, nullable=True)
    token_expires_at = Column(DateTime(timezone=True), nullable=True)
    scope = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    sync_status = Column(String, nullable=False, default="pending")

    __table_args__ = (
        UniqueConstraint(
            'business_id', 'program_id', 'provider', 'calendar_id',
            name='uix_calendar_connection_target'
        ),
    )
