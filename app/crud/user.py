from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
from app.models.user import User, UserRole
from app.core.security import get_password_hash


class CRUDUser:
    """
    CRUD operations for User model.

    Note: users are looked up globally by email during sign-in, so this
    does not inherit the business-scoped CRUDBase. Emails are stored and
    compared lowercased.
    """

    def __init__(self):
        self.model = User

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.lower())
        return db.execute(stmt).scalar_one_or_none()

    def create(
        self,
        db: Session,
        *,
        email: str,
        business_id: str,
        password: Optional[str] = None,
        full_name: Optional[str] = None,
        role: UserRole = UserRole.staff,
        is_active: bool = True,
        commit: bool = True
    ) -> User:
        """
        Create a new user.

        Args:
            db: Database session
            email: User email (stored lowercased)
            business_id: Business the user belongs to
            password: Plain text password (will be hashed). Invited users
                are created without one.
            full_name: Display name
            role: Role within the business
            is_active: Whether user is active
            commit: Whether to commit immediately

        Returns:
            Created User instance

        Raises:
            ValueError: If a user with this email already exists
        """
        db_user = User(
            email=email.lower(),
            hashed_password=get_password_hash(password) if password else None,
            business_id=business_id,
            full_name=full_name,
            role=role.value,
            is_active=is_active
        )
        db.add(db_user)

        try:
            if commit:
                db.commit()
                db.refresh(db_user)
            else:
                db.flush()  # Get ID without committing
        except IntegrityError as e:
            db.rollback()
            if "unique" in str(e).lower():
                raise ValueError(f"User with email {email} already exists")
            raise e

        return db_user

    def set_password(self, db: Session, *, db_user: User, password: str) -> User:
        db_user.hashed_password = get_password_hash(password)
        db.add(db_user)
        db.commit()
        db.refresh(db_user)
        return db_user


# Create singleton instance
user = CRUDUser()
