from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.user import User
from app.schemas.onboarding import (
    OnboardingStatusResponse,
    UpdateStepRequest,
    StepRouteResponse,
    ProgressStepResponse,
)
from app.services.onboarding import (
    onboarding_service,
    OnboardingResult,
    OnboardingStatus,
    FailureReason,
)
from app.utils.onboarding_steps import STEP_GO_LIVE, get_step_route, get_next_step_route, get_progress_step
from app.core.business_context import get_business_id
from app.dependencies import get_current_user
from app.core.logging_config import logger

router = APIRouter()

FAILURE_STATUS_CODES = {
    FailureReason.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureReason.INVALID_STEP: status.HTTP_400_BAD_REQUEST,
    FailureReason.STORE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _to_response(onboarding_status: OnboardingStatus) -> OnboardingStatusResponse:
    return OnboardingStatusResponse(
        business_id=onboarding_status.business_id,
        completed=onboarding_status.completed,
        current_step=onboarding_status.current_step,
        redirect=onboarding_status.redirect,
    )


def _unwrap(result: OnboardingResult) -> OnboardingStatusResponse:
    if not result:
        raise HTTPException(
            status_code=FAILURE_STATUS_CODES[result.reason],
            detail=result.detail or result.reason.value
        )
    return _to_response(result.status)


@router.get("", response_model=OnboardingStatusResponse)
def get_onboarding_status(
    db: Session = Depends(get_db),
    _business_id: str = Depends(get_business_id)
):
    """
    Get current onboarding status and the page the user belongs on.

    An unreadable business is reported at the first step, so the
    dashboard always has somewhere to go.
    """
    return _to_response(onboarding_service.check_onboarding_status(db, _business_id))


@router.put("/step", response_model=OnboardingStatusResponse)
def update_step(
    data: UpdateStepRequest,
    db: Session = Depends(get_db),
    _business_id: str = Depends(get_business_id)
):
    """
    Overwrite the current step.
    """
    logger.info(f"Setting onboarding step for business {_business_id} to {data.step}")
    return _unwrap(onboarding_service.update_onboarding_step(db, _business_id, data.step))


@router.post("/complete", response_model=OnboardingStatusResponse)
def complete_onboarding(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Mark onboarding as completed and activate the business.
    """
    logger.info(f"Completing onboarding for business {current_user.business_id}")
    return _unwrap(onboarding_service.complete_onboarding(db, current_user.business_id, user=current_user))


def _finish_tutorial(db: Session, business_id: str, outcome: str) -> OnboardingStatusResponse:
    logger.info(f"Tutorial {outcome} for business {business_id}")
    return _unwrap(onboarding_service.update_onboarding_step(db, business_id, STEP_GO_LIVE))


@router.post("/tutorial/skip", response_model=OnboardingStatusResponse)
def skip_tutorial(
    db: Session = Depends(get_db),
    _business_id: str = Depends(get_business_id)
):
    """
    Skip the dashboard tour and move on to go-live.
    """
    return _finish_tutorial(db, _business_id, "skipped")


@router.post("/tutorial/complete", response_model=OnboardingStatusResponse)
def complete_tutorial(
    db: Session = Depends(get_db),
    _business_id: str = Depends(get_business_id)
):
    """
    Finish the dashboard tour and move on to go-live.
    """
    return _finish_tutorial(db, _business_id, "completed")


@router.get("/routes/{step}", response_model=StepRouteResponse)
def get_route_for_step(step: int):
    """
    Look up the page for a step and the one after it.
    """
    return StepRouteResponse(
        step=step,
        route=get_step_route(step),
        next_route=get_next_step_route(step),
    )


@router.get("/progress", response_model=ProgressStepResponse)
def get_progress_for_path(path: str):
    """
    Step shown on the progress bar for an onboarding page.
    """
    return ProgressStepResponse(path=path, progress_step=get_progress_step(path))
