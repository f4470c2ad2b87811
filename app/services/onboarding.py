from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from app.crud.onboarding import onboarding as onboarding_crud
from app.models.user import User, UserRole
from app.utils.onboarding_steps import (
    STEP_WELCOME,
    STEP_COMPLETE,
    is_valid_step,
    normalize_step,
    get_redirect_route,
)
from app.core.logging_config import logger


class FailureReason(str, Enum):
    NOT_FOUND = "not_found"
    STORE_ERROR = "store_error"
    INVALID_STEP = "invalid_step"


@dataclass(frozen=True)
class OnboardingStatus:
    """Onboarding position derived from the business row at read time."""
    business_id: str
    completed: bool
    current_step: int

    @classmethod
    def initial(cls, business_id: str) -> "OnboardingStatus":
        return cls(business_id=business_id, completed=False, current_step=STEP_WELCOME)

    @property
    def redirect(self) -> str:
        return get_redirect_route(self.completed, self.current_step)


@dataclass(frozen=True)
class OnboardingResult:
    """
    Outcome of an onboarding read or write.

    Truthy on success, so callers that only care whether a write went
    through can keep treating it as a boolean.
    """
    success: bool
    status: Optional[OnboardingStatus] = None
    reason: Optional[FailureReason] = None
    detail: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, status: Optional[OnboardingStatus] = None) -> "OnboardingResult":
        return cls(success=True, status=status)

    @classmethod
    def failed(cls, reason: FailureReason, detail: Optional[str] = None) -> "OnboardingResult":
        return cls(success=False, reason=reason, detail=detail)


def _store_failure(db: Session, action: str, business_id: str, exc: SQLAlchemyError) -> OnboardingResult:
    db.rollback()
    logger.error(f"Onboarding {action} failed for business {business_id}: {type(exc).__name__}: {exc}")
    return OnboardingResult.failed(FailureReason.STORE_ERROR, str(exc))


class OnboardingService:
    """
    Tracks a business through the setup wizard.

    Store failures never escape: every operation returns an OnboardingResult
    so callers can tell a missing business from a database outage.
    """

    def __init__(self):
        self.crud = onboarding_crud

    def resolve_onboarding_status(self, db: Session, business_id: str) -> OnboardingResult:
        """
        Read the onboarding status of a business.

        Returns:
            Success with the derived status, or a NOT_FOUND / STORE_ERROR failure
        """
        try:
            progress = self.crud.get_progress(db, business_id)
        except SQLAlchemyError as e:
            return _store_failure(db, "status read", business_id, e)

        if progress is None:
            return OnboardingResult.failed(FailureReason.NOT_FOUND, f"Business {business_id} not found")

        step, completed_at = progress
        return OnboardingResult.ok(OnboardingStatus(
            business_id=business_id,
            completed=completed_at is not None,
            current_step=normalize_step(step),
        ))

    def check_onboarding_status(self, db: Session, business_id: str) -> OnboardingStatus:
        """
        Onboarding status of a business, falling back to the first step
        (not completed) when the business is missing or cannot be read.
        """
        result = self.resolve_onboarding_status(db, business_id)
        if not result:
            return OnboardingStatus.initial(business_id)
        return result.status

    def update_onboarding_step(self, db: Session, business_id: str, step: int) -> OnboardingResult:
        """
        Overwrite the current step. Moving backwards is allowed; this is
        the only way to leave the linear progression.
        """
        if not is_valid_step(step):
            return OnboardingResult.failed(
                FailureReason.INVALID_STEP,
                f"Invalid step value: {step}. Must be between {STEP_WELCOME} and {STEP_COMPLETE}"
            )

        try:
            updated = self.crud.set_step(db, business_id, step)
        except SQLAlchemyError as e:
            return _store_failure(db, "step update", business_id, e)

        if not updated:
            return OnboardingResult.failed(FailureReason.NOT_FOUND, f"Business {business_id} not found")

        return self.resolve_onboarding_status(db, business_id)

    def complete_onboarding(
        self,
        db: Session,
        business_id: str,
        user: Optional[User] = None
    ) -> OnboardingResult:
        """
        Mark onboarding as completed and activate the business.

        When the caller is the business owner their own onboarding flag is
        set as well; a failure there is logged but does not fail completion.
        """
        try:
            updated = self.crud.mark_completed(db, business_id, datetime.now(timezone.utc))
        except SQLAlchemyError as e:
            return _store_failure(db, "completion", business_id, e)

        if not updated:
            return OnboardingResult.failed(FailureReason.NOT_FOUND, f"Business {business_id} not found")

        if user is not None and user.role == UserRole.owner.value:
            try:
                self.crud.mark_owner_completed(db, user.id)
                logger.info(f"Owner onboarding marked as completed for user {user.id}")
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Error marking owner onboarding as completed for user {user.id}: {e}")

        return self.resolve_onboarding_status(db, business_id)


# Create a singleton instance
onboarding_service = OnboardingService()
