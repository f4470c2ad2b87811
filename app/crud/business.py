from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
from app.models.business import Business
from app.models.user import User, UserRole
from app.crud.user import user as user_crud


class CRUDBusiness:
    """
    CRUD operations for Business model.

    Note: Business doesn't have business_id (it IS the business),
    so we don't inherit from CRUDBase.
    """

    def __init__(self):
        self.model = Business

    def get(self, db: Session, business_id: str) -> Optional[Business]:
        stmt = select(Business).where(Business.id == business_id)
        return db.execute(stmt).scalar_one_or_none()

    def get_by_phone(self, db: Session, to_number: str) -> Optional[Business]:
        stmt = select(Business).where(Business.to_number == to_number)
        return db.execute(stmt).scalar_one_or_none()

    def get_multi(self, db: Session) -> List[Business]:
        stmt = select(Business).order_by(Business.name)
        return list(db.execute(stmt).scalars().all())

    def update(self, db: Session, *, db_obj: Business, obj_in: Dict[str, Any]) -> Business:
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def create_with_owner(
        self,
        db: Session,
        *,
        name: str,
        to_number: str,
        email: str,
        vertical: Optional[str] = None,
        owner_name: Optional[str] = None,
        password: Optional[str] = None
    ) -> Tuple[Business, User]:
        """
        Create a business and its owner user atomically.

        The business starts inactive at the first onboarding step; it is
        activated when onboarding completes.

        Raises:
            ValueError: If the phone number or email is already taken
        """
        try:
            business = Business(
                name=name.strip(),
                to_number=to_number.strip(),
                vertical=vertical,
                onboarding_step=0,
                is_active=False,
            )
            db.add(business)
            db.flush()  # Get business.id without committing

            owner = user_crud.create(
                db=db,
                email=email,
                business_id=business.id,
                password=password,
                full_name=owner_name or name or "Business Owner",
                role=UserRole.owner,
                commit=False  # Don't commit yet - we'll commit both together
            )

            db.commit()
            db.refresh(business)
            db.refresh(owner)

            return business, owner

        except IntegrityError as e:
            db.rollback()
            if "unique" in str(e).lower():
                raise ValueError("A business with this phone number or a user with this email already exists")
            raise e


# Create singleton instance
business = CRUDBusiness()
