from typing import Optional
from urllib.parse import urlencode
from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from app.database import get_db
from app.core.config import settings
from app.schemas.calendar import CalendarConnectResponse
from app.services.calendar import calendar_service, CalendarConnectError
from app.core.logging_config import logger

router = APIRouter()


def _dashboard_redirect(path: str, **params: str) -> RedirectResponse:
    url = f"{settings.SITE_URL.rstrip('/')}{path}"
    if params:
        url = f"{url}?{urlencode(params)}"
    return RedirectResponse(url=url, status_code=307)


@router.get("/connect", response_model=CalendarConnectResponse)
def connect_calendar(business_id: Optional[str] = None, program_id: Optional[str] = None):
    """
    Start the Google Calendar OAuth flow for a business or one of its programs.

    Returns:
        The Google consent URL to send the user to

    Raises:
        HTTPException 400: If business_id is missing
        HTTPException 500: If Google OAuth is not configured
    """
    return CalendarConnectResponse(auth_url=calendar_service.build_auth_url(business_id, program_id))


@router.get("/callback")
def calendar_callback(
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Google redirects here after consent. Always answers with a redirect
    back to the dashboard carrying either calendar_connected or calendar_error.
    """
    if error:
        logger.error(f"OAuth error: {error}")
        return _dashboard_redirect("/settings", calendar_error=error)

    if not code or not state:
        return _dashboard_redirect("/settings", calendar_error="missing_params")

    try:
        target = calendar_service.complete_connection(db, code, state)
    except CalendarConnectError as e:
        logger.error(f"Calendar callback failed: {e.code}: {e}")
        return _dashboard_redirect("/settings", calendar_error=e.code)

    if target.program_id:
        return _dashboard_redirect("/programs", calendar_connected="true", program_id=target.program_id)
    return _dashboard_redirect("/settings", calendar_connected="true")
