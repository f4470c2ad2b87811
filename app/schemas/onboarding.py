from pydantic import BaseModel, Field


class OnboardingStatusResponse(BaseModel):
    """Response schema for onboarding status"""
    business_id: str
    completed: bool
    current_step: int = Field(..., ge=0, le=7)
    redirect: str


class UpdateStepRequest(BaseModel):
    """Request schema for overwriting the current step"""
    step: int = Field(..., ge=0, le=7)


class StepRouteResponse(BaseModel):
    step: int
    route: str
    next_route: str


class ProgressStepResponse(BaseModel):
    path: str
    progress_step: int
