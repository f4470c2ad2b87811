from fastapi import Depends
from app.models.user import User
from app.dependencies import get_current_user


def get_business_id(current_user: User = Depends(get_current_user)) -> str:
    """
    FastAPI dependency that resolves the business the caller acts for.

    The id comes from the authenticated user rather than any client-held
    session value, and is passed explicitly through service and CRUD layers.

    Args:
        current_user: Authenticated user from JWT token

    Returns:
        Business ID of the current user
    """
    return current_user.business_id
