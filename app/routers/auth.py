from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.core.security import verify_password, create_access_token
from app.crud.user import user as user_crud
from app.models.user import User
from app.dependencies import get_current_user
from app.schemas.user import (
    VerifyCredentialsRequest,
    VerifyCredentialsResponse,
    CheckEmailRequest,
    CheckEmailResponse,
    InvitedUser,
    SetPasswordRequest,
    SetPasswordResponse,
    UserResponse,
)
from app.core.logging_config import logger

router = APIRouter()


def _user_claims(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "business_id": user.business_id,
        "role": user.role,
    }


@router.post("/verify-credentials", response_model=VerifyCredentialsResponse)
def verify_credentials(credentials: VerifyCredentialsRequest, db: Session = Depends(get_db)):
    """
    Verify user credentials for the dashboard sign-in.

    Returns the user and a JWT whose business_id claim scopes every
    subsequent request.

    Raises:
        HTTPException 401: If credentials are invalid
        HTTPException 403: If the user is inactive
    """
    user = user_crud.get_by_email(db, email=credentials.email)

    if not user or not verify_password(credentials.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )

    claims = _user_claims(user)
    return VerifyCredentialsResponse(user=claims, access_token=create_access_token(data=claims))


@router.post("/check-email", response_model=CheckEmailResponse, response_model_exclude_none=True)
def check_email(data: CheckEmailRequest, db: Session = Depends(get_db)):
    """
    Tell the sign-up page whether an email was invited and still needs a password.
    """
    user = user_crud.get_by_email(db, email=data.email)

    if user is None:
        return CheckEmailResponse(
            exists=False,
            message="This email is not registered. Please contact your administrator to be added to the system."
        )

    if user.hashed_password:
        return CheckEmailResponse(
            exists=True,
            has_auth=True,
            message="This email already has an account. Please sign in instead."
        )

    return CheckEmailResponse(
        exists=True,
        has_auth=False,
        user=InvitedUser(id=user.id, email=user.email, business_id=user.business_id)
    )


@router.post("/set-password", response_model=SetPasswordResponse)
def set_password(data: SetPasswordRequest, db: Session = Depends(get_db)):
    """
    Let an invited user choose their password.

    Raises:
        HTTPException 404: If the email was never invited
        HTTPException 400: If the account already has a password
    """
    user = user_crud.get_by_email(db, email=data.email)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    if user.hashed_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Password already set. Please sign in instead."
        )

    user = user_crud.set_password(db, db_user=user, password=data.password)
    logger.info(f"Password set for invited user {user.id}")
    return SetPasswordResponse(success=True, user_id=user.id)


@router.get("/me", response_model=UserResponse)
def read_current_user(current_user: User = Depends(get_current_user)):
    return current_user
