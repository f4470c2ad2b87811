from datetime import datetime
from typing import Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import select, update
from app.models.business import Business
from app.models.user import User, UserRole
from app.utils.onboarding_steps import STEP_COMPLETE


class CRUDOnboarding:
    """
    Reads and writes the onboarding columns of the business row.

    Store errors (SQLAlchemyError) propagate; the onboarding service decides
    how callers see them.
    """

    def get_progress(self, db: Session, business_id: str) -> Optional[Tuple[Optional[int], Optional[datetime]]]:
        """
        Fetch (onboarding_step, onboarding_completed_at) for a business.

        Returns:
            The two stored values, or None if the business does not exist
        """
        stmt = select(
            Business.onboarding_step,
            Business.onboarding_completed_at
        ).where(Business.id == business_id)
        row = db.execute(stmt).one_or_none()
        if row is None:
            return None
        return row.onboarding_step, row.onboarding_completed_at

    def set_step(self, db: Session, business_id: str, step: int) -> int:
        """
        Overwrite the stored step, whatever it was.

        Returns:
            Number of rows updated (0 when the business does not exist)
        """
        result = db.execute(
            update(Business)
            .where(Business.id == business_id)
            .values(onboarding_step=step)
        )
        db.commit()
        return result.rowcount

    def mark_completed(self, db: Session, business_id: str, completed_at: datetime) -> int:
        """
        Finish onboarding in a single UPDATE: completion time, terminal
        step and activation are written together.
        """
        result = db.execute(
            update(Business)
            .where(Business.id == business_id)
            .values(
                onboarding_completed_at=completed_at,
                onboarding_step=STEP_COMPLETE,
                is_active=True,
            )
        )
        db.commit()
        return result.rowcount

    def mark_owner_completed(self, db: Session, user_id: str) -> int:
        """Flag an owner's own onboarding as done. Non-owners are left untouched."""
        result = db.execute(
            update(User)
            .where(User.id == user_id, User.role == UserRole.owner.value)
            .values(owner_onboarding_completed=True)
        )
        db.commit()
        return result.rowcount


# Create singleton instance
onboarding = CRUDOnboarding()
