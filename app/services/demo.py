import math
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from app.core.config import settings
from app.crud.business import business as business_crud
from app.crud.call import call as call_crud
from app.crud.demo_session import demo_session as demo_session_crud
from app.crud.patient import patient as patient_crud
from app.models.business import Business
from app.models.demo_session import DemoSession
from app.models.patient import Patient
from app.schemas.demo import (
    DemoBusinessRequest,
    DemoSessionResponse,
    DemoSessionState,
    DemoSessionUpdate,
)
from app.core.logging_config import logger


def as_utc(value: datetime) -> datetime:
    """SQLite hands timestamps back naive; everything stored here is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class DemoUnavailable(Exception):
    """Another visitor holds the demo line."""

    def __init__(self, next_available_in: int):
        super().__init__(f"Demo in use. Next available in {next_available_in} minutes.")
        self.next_available_in = next_available_in


class DemoService:
    """
    Timed demo sessions on the shared demo business.

    Only one session is active at a time; everything a visitor configures
    is written to the same demo business and wiped by cleanup.
    """

    def __init__(self):
        self.crud = demo_session_crud

    def _get_demo_business(self, db: Session) -> Business:
        demo_business = business_crud.get(db, settings.DEMO_BUSINESS_ID)
        if demo_business is None:
            logger.error(f"Demo business {settings.DEMO_BUSINESS_ID} not found")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Demo business not configured"
            )
        return demo_business

    def get_session(self, db: Session, session_token: str) -> DemoSession:
        """
        Raises:
            HTTPException 404: If the session token is unknown
        """
        session = self.crud.get_by_token(db, session_token)
        if session is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Demo session not found"
            )
        return session

    def create_session(
        self,
        db: Session,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> DemoSession:
        """
        Reserve the demo line.

        Raises:
            DemoUnavailable: While another session is active and unexpired
            HTTPException 500: If the demo business does not exist
        """
        now = now or datetime.now(timezone.utc)

        active = self.crud.get_current_active(db, now)
        if active is not None:
            remaining = (as_utc(active.expires_at) - now).total_seconds()
            raise DemoUnavailable(max(1, math.ceil(remaining / 60)))

        demo_business = self._get_demo_business(db)
        business_crud.update(db, db_obj=demo_business, obj_in={
            "is_demo": True,
            "demo_phone_number": settings.DEMO_PHONE_NUMBER,
            "to_number": settings.DEMO_PHONE_NUMBER,
        })

        session = self.crud.create(
            db,
            session_token=str(uuid.uuid4()),
            expires_at=now + timedelta(minutes=settings.DEMO_SESSION_MINUTES),
            demo_business_id=demo_business.id,
            email=email or None,
            phone=phone or None,
        )
        logger.info(f"Demo session {session.id} created, expires at {session.expires_at}")
        return session

    def demo_link(self, session: DemoSession) -> str:
        return f"{settings.SITE_URL.rstrip('/')}/demo/{session.session_token}"

    def describe_session(
        self,
        db: Session,
        session_token: str,
        now: Optional[datetime] = None
    ) -> DemoSessionState:
        """
        Session with its countdown. A queued (inactive) session counts down
        to the end of the active one and reports its place in the queue.

        Raises:
            HTTPException 404: If the session token is unknown
        """
        now = now or datetime.now(timezone.utc)
        session = self.get_session(db, session_token)

        expires_at = as_utc(session.expires_at)
        active_expires_at = None
        queue_position = None
        if not session.is_active:
            active = self.crud.get_current_active(db, now)
            if active is not None:
                active_expires_at = as_utc(active.expires_at)
                expires_at = active_expires_at
            waiting = [s.id for s in self.crud.get_waiting(db)]
            queue_position = waiting.index(session.id) + 1 if session.id in waiting else 0

        remaining_seconds = max(0, math.floor((expires_at - now).total_seconds()))
        return DemoSessionState(
            **DemoSessionResponse.model_validate(session).model_dump(),
            is_expired=expires_at < now,
            remaining_seconds=remaining_seconds,
            remaining_minutes=remaining_seconds // 60,
            active_session_expires_at=active_expires_at,
            queue_position=queue_position,
        )

    def update_session(self, db: Session, session_token: str, data: DemoSessionUpdate) -> DemoSession:
        session = self.get_session(db, session_token)
        return self.crud.update(db, db_obj=session, obj_in=data.model_dump(exclude_unset=True))

    def save_demo_business(self, db: Session, session_token: str, data: DemoBusinessRequest) -> Business:
        """
        Write the visitor's setup onto the shared demo business.

        Raises:
            HTTPException 404: If the session token is unknown
            HTTPException 500: If the demo business does not exist
        """
        session = self.get_session(db, session_token)
        demo_business = self._get_demo_business(db)

        update_data = {
            "name": data.name,
            "vertical": data.vertical or "medspa",
            "is_demo": True,
            "demo_phone_number": settings.DEMO_PHONE_NUMBER,
            "to_number": settings.DEMO_PHONE_NUMBER,
            "is_active": True,
        }
        for field in ("categories", "hours", "faqs"):
            value = getattr(data, field)
            if value:
                update_data[field] = value

        demo_business = business_crud.update(db, db_obj=demo_business, obj_in=update_data)

        if session.demo_business_id != demo_business.id:
            self.crud.update(db, db_obj=session, obj_in={"demo_business_id": demo_business.id})

        return demo_business

    def list_patients(self, db: Session, session_token: str, limit: int = 5) -> List[Patient]:
        self.get_session(db, session_token)
        return patient_crud.get_recent(db, settings.DEMO_BUSINESS_ID, limit=limit)

    def cleanup(self, db: Session, session_token: str, now: Optional[datetime] = None) -> dict:
        """
        Wipe the calls and patients a demo produced once its session is over.

        Returns:
            Number of calls and patients deleted

        Raises:
            HTTPException 404: If the session token is unknown
            HTTPException 400: While the session is still running
        """
        now = now or datetime.now(timezone.utc)
        session = self.get_session(db, session_token)

        if session.is_active and as_utc(session.expires_at) > now:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Session is still active. Cannot cleanup until expired."
            )

        logger.info(f"Starting demo cleanup for business {settings.DEMO_BUSINESS_ID}")
        deleted_calls = call_crud.delete_all(db, business_id=settings.DEMO_BUSINESS_ID, commit=False)
        deleted_patients = patient_crud.delete_all(db, business_id=settings.DEMO_BUSINESS_ID, commit=False)
        session.is_active = False
        db.commit()
        logger.info(f"Deleted {deleted_calls} calls and {deleted_patients} patients for demo business")

        return {"calls": deleted_calls, "patients": deleted_patients}


# Create a singleton instance
demo_service = DemoService()
