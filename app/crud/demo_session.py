from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import select
from app.models.demo_session import DemoSession


class CRUDDemoSession:
    """
    CRUD operations for DemoSession model.

    Sessions are addressed by their public token rather than their id.
    """

    def __init__(self):
        self.model = DemoSession

    def get_by_token(self, db: Session, session_token: str) -> Optional[DemoSession]:
        stmt = select(DemoSession).where(DemoSession.session_token == session_token)
        return db.execute(stmt).scalar_one_or_none()

    def get_current_active(self, db: Session, now: datetime) -> Optional[DemoSession]:
        """The newest active session that has not yet expired."""
        stmt = (
            select(DemoSession)
            .where(DemoSession.is_active.is_(True), DemoSession.expires_at > now)
            .order_by(DemoSession.created_at.desc())
            .limit(1)
        )
        return db.execute(stmt).scalar_one_or_none()

    def get_waiting(self, db: Session) -> List[DemoSession]:
        """Inactive sessions in arrival order."""
        stmt = (
            select(DemoSession)
            .where(DemoSession.is_active.is_(False))
            .order_by(DemoSession.created_at.asc())
        )
        return list(db.execute(stmt).scalars().all())

    def create(
        self,
        db: Session,
        *,
        session_token: str,
        expires_at: datetime,
        demo_business_id: str,
        email: Optional[str] = None,
        phone: Optional[str] = None
    ) -> DemoSession:
        db_obj = DemoSession(
            session_token=session_token,
            email=email,
            phone=phone,
            expires_at=expires_at,
            is_active=True,
            demo_business_id=demo_business_id,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(self, db: Session, *, db_obj: DemoSession, obj_in: dict) -> DemoSession:
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


# Create singleton instance
demo_session = CRUDDemoSession()
