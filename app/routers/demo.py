from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.business import BusinessUpdateResponse, BusinessResponse
from app.schemas.demo import (
    DemoCreateRequest,
    DemoCreateResponse,
    DemoUnavailableResponse,
    DemoSessionEnvelope,
    DemoSessionUpdate,
    DemoSessionUpdateResponse,
    DemoSessionResponse,
    DemoBusinessRequest,
    DemoPatientsResponse,
    PatientResponse,
    DemoCleanupResponse,
)
from app.services.demo import demo_service, DemoUnavailable
from app.core.logging_config import logger

router = APIRouter()


@router.post(
    "/create",
    response_model=DemoCreateResponse,
    responses={429: {"model": DemoUnavailableResponse}}
)
def create_demo(data: DemoCreateRequest, db: Session = Depends(get_db)):
    """
    Reserve the demo line for one visitor.

    Returns 429 with the wait time while another demo is running.
    """
    try:
        session = demo_service.create_session(db, email=data.email, phone=data.phone)
    except DemoUnavailable as e:
        logger.info(f"Demo requested while busy, next slot in {e.next_available_in} minutes")
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content=DemoUnavailableResponse(
                next_available_in=e.next_available_in,
                message=str(e),
            ).model_dump(),
        )

    return DemoCreateResponse(
        success=True,
        session_id=session.id,
        session_token=session.session_token,
        expires_at=session.expires_at,
        demo_link=demo_service.demo_link(session),
    )


@router.get("/{session_token}", response_model=DemoSessionEnvelope)
def get_demo_session(session_token: str, db: Session = Depends(get_db)):
    """
    Session details with the countdown and, for queued sessions, queue position.

    Raises:
        HTTPException 404: If the session token is unknown
    """
    return DemoSessionEnvelope(session=demo_service.describe_session(db, session_token))


@router.put("/{session_token}", response_model=DemoSessionUpdateResponse)
def update_demo_session(
    session_token: str,
    data: DemoSessionUpdate,
    db: Session = Depends(get_db)
):
    session = demo_service.update_session(db, session_token, data)
    return DemoSessionUpdateResponse(success=True, session=DemoSessionResponse.model_validate(session))


@router.post("/{session_token}/business", response_model=BusinessUpdateResponse)
def save_demo_business(
    session_token: str,
    data: DemoBusinessRequest,
    db: Session = Depends(get_db)
):
    """
    Configure the shared demo business from the demo setup page.
    """
    logger.info(f"Saving demo business for session {session_token}: {data.name}")
    business = demo_service.save_demo_business(db, session_token, data)
    return BusinessUpdateResponse(success=True, business=BusinessResponse.model_validate(business))


@router.get("/{session_token}/patients", response_model=DemoPatientsResponse)
def get_demo_patients(session_token: str, db: Session = Depends(get_db)):
    """
    Latest patients the demo calls produced.
    """
    patients = demo_service.list_patients(db, session_token)
    return DemoPatientsResponse(
        patients=[PatientResponse.model_validate(p) for p in patients],
        count=len(patients),
    )


@router.post("/{session_token}/cleanup", response_model=DemoCleanupResponse)
def cleanup_demo(session_token: str, db: Session = Depends(get_db)):
    """
    Delete the demo's calls and patients once the session is over.

    Raises:
        HTTPException 404: If the session token is unknown
        HTTPException 400: While the session is still running
    """
    deleted = demo_service.cleanup(db, session_token)
    return DemoCleanupResponse(
        success=True,
        deleted=deleted,
        message="Demo data cleaned up successfully",
    )
