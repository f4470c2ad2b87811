from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from sqlalchemy import select
from app.models.calendar_connection import CalendarConnection


class CRUDCalendarConnection:
    """CRUD operations for CalendarConnection model."""

    def __init__(self):
        self.model = CalendarConnection

    def get_for_target(
        self,
        db: Session,
        *,
        business_id: str,
        program_id: Optional[str],
        provider: str,
        calendar_id: str
    ) -> Optional[CalendarConnection]:
        stmt = select(CalendarConnection).where(
            CalendarConnection.business_id == business_id,
            CalendarConnection.program_id.is_(None) if program_id is None
            else CalendarConnection.program_id == program_id,
            CalendarConnection.provider == provider,
            CalendarConnection.calendar_id == calendar_id,
        )
        return db.execute(stmt).scalar_one_or_none()

    def upsert(self, db: Session, *, data: Dict[str, Any]) -> CalendarConnection:
        """
        Insert a connection or refresh the tokens of the existing one for
        the same business, program, provider and calendar.

        A null program_id never collides in a SQL unique index, so the
        existing row is looked up explicitly instead of relying on ON CONFLICT.
        """
        connection = self.get_for_target(
            db,
            business_id=data["business_id"],
            program_id=data.get("program_id"),
            provider=data["provider"],
            calendar_id=data["calendar_id"],
        )
        if connection is None:
            connection = CalendarConnection(**data)
        else:
            for field, value in data.items():
                setattr(connection, field, value)

        db.add(connection)
        db.commit()
        db.refresh(connection)
        return connection


# Create singleton instance
calendar_connection = CRUDCalendarConnection()
