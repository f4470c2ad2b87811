from typing import Tuple
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from app.crud.business import business as business_crud
from app.crud.user import user as user_crud
from app.models.user import User
from app.schemas.user import InviteUserRequest
from app.core.logging_config import logger


class UserService:
    """
    Service layer for dashboard users.

    Invited users are stored without a password; they choose one through
    the set-password endpoint before their first sign-in.
    """

    def __init__(self):
        self.crud = user_crud

    def invite_user(self, db: Session, data: InviteUserRequest) -> Tuple[User, bool]:
        """
        Add a user to an existing business, or re-issue a pending invite.

        Returns:
            The invited user and whether a new record was created

        Raises:
            HTTPException 404: If the business does not exist
            HTTPException 400: If the user already has an account or a
                pending invite to another business
        """
        if business_crud.get(db, data.business_id) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Business not found"
            )

        existing = self.crud.get_by_email(db, email=data.email)
        if existing is not None:
            if existing.hashed_password:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="User already exists and has an account. They can sign in directly."
                )
            if existing.business_id != data.business_id:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="User has a pending invitation to another business"
                )
            logger.info(f"Re-issuing invite for user {existing.id}")
            return existing, False

        try:
            invited = self.crud.create(
                db=db,
                email=data.email,
                business_id=data.business_id,
                password=None,
                role=data.role,
            )
        except ValueError as e:
            logger.warning(f"Invite rejected: {e}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A user with this email already exists"
            )

        logger.info(f"Invited {invited.email} to business {invited.business_id} as {invited.role}")
        return invited, True


# Create a singleton instance
user_service = UserService()
