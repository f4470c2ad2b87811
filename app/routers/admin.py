from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import verify_admin_key
from app.schemas.business import (
    BusinessCreateRequest,
    BusinessCreateResponse,
    BusinessListResponse,
    BusinessResponse,
)
from app.schemas.user import InviteUserRequest, InviteUserResponse, InvitedUser
from app.services.business import business_service
from app.services.user import user_service

router = APIRouter(dependencies=[Depends(verify_admin_key)])


@router.get("/businesses", response_model=BusinessListResponse)
def list_businesses(db: Session = Depends(get_db)):
    """
    List every business, ordered by name, for the ops console.
    """
    businesses = business_service.list_businesses(db)
    return BusinessListResponse(
        businesses=[BusinessResponse.model_validate(b) for b in businesses],
        timestamp=datetime.now(timezone.utc),
    )


@router.post("/businesses", response_model=BusinessCreateResponse, status_code=status.HTTP_201_CREATED)
def create_business(
    request: BusinessCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Create a new business and its owner account.

    Protected by x-admin-key header. The business starts inactive at the
    first onboarding step; the owner completes onboarding to go live.

    Raises:
        HTTPException 400: If the phone number or email already exists
    """
    business, owner = business_service.create_business(db, request)

    return BusinessCreateResponse(
        success=True,
        business_id=business.id,
        business_name=business.name,
        to_number=business.to_number,
        user_id=owner.id,
        user_email=owner.email
    )


@router.post("/users/invite", response_model=InviteUserResponse)
def invite_user(
    request: InviteUserRequest,
    db: Session = Depends(get_db)
):
    """
    Invite a user to an existing business.

    The user is created without a password and finishes sign-up through
    /api/auth/check-email and /api/auth/set-password. No e-mail is sent.

    Raises:
        HTTPException 404: If the business does not exist
        HTTPException 400: If the user already has an account
    """
    invited, created = user_service.invite_user(db, request)
    return InviteUserResponse(
        success=True,
        message="Invitation created" if created else "Invitation already pending",
        user=InvitedUser(id=invited.id, email=invited.email, business_id=invited.business_id),
    )
