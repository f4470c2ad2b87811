"""
Onboarding wizard steps and the dashboard pages they live on.

The wizard is linear: a business only ever moves to the next step, and
step 7 is terminal (the business is live and lands on the dashboard root).
"""
from typing import Optional

STEP_WELCOME = 0
STEP_BUSINESS_SETUP = 1
STEP_MODE_SELECTION = 2
STEP_BUSINESS_CONFIG = 3
STEP_TEST_CALL = 4
STEP_TUTORIAL = 5
STEP_GO_LIVE = 6
STEP_COMPLETE = 7

MIN_STEP = STEP_WELCOME
MAX_STEP = STEP_COMPLETE

ROUTE_BUSINESS_SETUP = "/onboarding/business-setup"
ROUTE_MODE_SELECTION = "/onboarding/mode-selection"
ROUTE_BUSINESS_CONFIG = "/onboarding/business-config"
ROUTE_TEST_CALL = "/onboarding/test-call"
ROUTE_TUTORIAL = "/onboarding/tutorial"
ROUTE_GO_LIVE = "/onboarding/go-live"
ROUTE_DASHBOARD = "/"

# Welcome and business setup share a page
STEP_ROUTES = {
    STEP_WELCOME: ROUTE_BUSINESS_SETUP,
    STEP_BUSINESS_SETUP: ROUTE_BUSINESS_SETUP,
    STEP_MODE_SELECTION: ROUTE_MODE_SELECTION,
    STEP_BUSINESS_CONFIG: ROUTE_BUSINESS_CONFIG,
    STEP_TEST_CALL: ROUTE_TEST_CALL,
    STEP_TUTORIAL: ROUTE_TUTORIAL,
    STEP_GO_LIVE: ROUTE_GO_LIVE,
    STEP_COMPLETE: ROUTE_DASHBOARD,
}

# Page fragment -> position shown on the progress bar, checked in order
PROGRESS_STEPS = (
    ("business-setup", 2),
    ("mode-selection", 3),
    ("business-config", 4),
    ("program-config", 4),
    ("test-call", 5),
    ("tutorial", 6),
    ("go-live", 7),
)
DEFAULT_PROGRESS_STEP = 2


def is_valid_step(step) -> bool:
    return isinstance(step, int) and not isinstance(step, bool) and MIN_STEP <= step <= MAX_STEP


def normalize_step(step: Optional[int]) -> int:
    """Coerce a stored step into the wizard range; unknown values restart at 0."""
    if is_valid_step(step):
        return step
    return STEP_WELCOME


def get_step_route(step: int) -> str:
    """
    Get the page for an onboarding step.

    Unrecognized steps fall back to the business setup page.
    """
    return STEP_ROUTES.get(step, ROUTE_BUSINESS_SETUP)


def get_next_step_route(current_step: int) -> str:
    """Get the page for the step after `current_step`, stopping at the terminal step."""
    return get_step_route(min(current_step + 1, MAX_STEP))


def get_redirect_route(completed: bool, current_step: int) -> str:
    """Where a user with this onboarding state should be sent."""
    if completed:
        return ROUTE_DASHBOARD
    return get_step_route(current_step)


def get_progress_step(path: str) -> int:
    """Map an onboarding page path to the step highlighted on the progress bar."""
    for fragment, step in PROGRESS_STEPS:
        if fragment in path:
            return step
    return DEFAULT_PROGRESS_STEP
