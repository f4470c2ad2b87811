from typing import Any, Dict, List, Tuple
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from app.crud.business import business as business_crud
from app.models.business import Business
from app.models.user import User
from app.schemas.business import BusinessUpdate, BusinessAdminUpdate, BusinessCreateRequest
from app.core.logging_config import logger


class BusinessService:
    """
    Service layer for business profile rules.

    Validates phone-number ownership before writes and turns missing rows
    into 404s.
    """

    def __init__(self):
        self.crud = business_crud

    def get_business(self, db: Session, business_id: str) -> Business:
        """
        Raises:
            HTTPException 404: If business not found
        """
        business = self.crud.get(db, business_id)
        if not business:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Business not found"
            )
        return business

    def list_businesses(self, db: Session) -> List[Business]:
        return self.crud.get_multi(db)

    def _ensure_phone_available(self, db: Session, business_id: str, to_number: str) -> None:
        owner = self.crud.get_by_phone(db, to_number)
        if owner is not None and owner.id != business_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A business with this phone number already exists"
            )

    def _apply_update(self, db: Session, business: Business, update_data: Dict[str, Any]) -> Business:
        if update_data.get("to_number"):
            update_data["to_number"] = update_data["to_number"].strip()
            self._ensure_phone_available(db, business.id, update_data["to_number"])
        return self.crud.update(db, db_obj=business, obj_in=update_data)

    def update_business(self, db: Session, business_id: str, data: BusinessUpdate) -> Business:
        """
        Partially update the caller's own business profile.

        Raises:
            HTTPException 404: If business not found
            HTTPException 400: If the phone number belongs to another business
        """
        business = self.get_business(db, business_id)
        return self._apply_update(db, business, data.model_dump(exclude_unset=True))

    def admin_update_business(self, db: Session, data: BusinessAdminUpdate) -> Business:
        """
        Ops update of any business, addressed by the business_id in the body.

        Raises:
            HTTPException 400: If business_id is missing or the phone number is taken
            HTTPException 404: If business not found
        """
        if not data.business_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="business_id is required"
            )
        business = self.get_business(db, data.business_id)
        update_data = data.model_dump(exclude_unset=True, exclude={"business_id"})
        return self._apply_update(db, business, update_data)

    def create_business(self, db: Session, data: BusinessCreateRequest) -> Tuple[Business, User]:
        """
        Create a business with its owner account.

        Raises:
            HTTPException 400: If the phone number or email is already taken
        """
        if not data.name.strip() or not data.to_number.strip() or not data.email.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing required fields: name, to_number, email"
            )

        if self.crud.get_by_phone(db, data.to_number.strip()):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A business with this phone number already exists"
            )

        try:
            business, owner = self.crud.create_with_owner(
                db=db,
                name=data.name,
                to_number=data.to_number,
                email=data.email,
                vertical=data.vertical,
                owner_name=data.owner_name,
                password=data.password,
            )
        except ValueError as e:
            logger.warning(f"Business creation rejected: {e}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A user with this email already exists"
            )

        logger.info(f"Created business {business.id} ({business.name}) with owner {owner.email}")
        return business, owner


# Create a singleton instance
business_service = BusinessService()
