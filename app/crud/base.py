from typing import Generic, TypeVar, Type, Optional, List, Any, Dict
from sqlalchemy.orm import Session
from sqlalchemy import select, delete
from pydantic import BaseModel
from app.database import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Generic CRUD class with business isolation via explicit business_id.

    Every read and delete filters on business_id, which is always passed
    explicitly from the router or service layer.

    Type Parameters:
        ModelType: SQLAlchemy model class with a business_id column
        CreateSchemaType: Pydantic schema for creating records
        UpdateSchemaType: Pydantic schema for updating records
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def get(self, db: Session, id: str, business_id: str) -> Optional[ModelType]:
        """
        Retrieve a single record by ID within a business.

        Returns:
            Model instance or None if not found or owned by another business
        """
        stmt = select(self.model).where(
            self.model.id == id,
            self.model.business_id == business_id
        )
        return db.execute(stmt).scalar_one_or_none()

    def get_multi(
        self,
        db: Session,
        *,
        skip: int = 0,
        limit: int = 100,
        business_id: str
    ) -> List[ModelType]:
        """Retrieve a page of records belonging to a business."""
        stmt = select(self.model).where(
            self.model.business_id == business_id
        ).offset(skip).limit(limit)
        return list(db.execute(stmt).scalars().all())

    def create(
        self,
        db: Session,
        *,
        obj_in: CreateSchemaType | Dict[str, Any],
        business_id: str
    ) -> ModelType:
        """Create a new record owned by a business."""
        obj_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        db_obj = self.model(business_id=business_id, **obj_data)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(
        self,
        db: Session,
        *,
        db_obj: ModelType,
        obj_in: UpdateSchemaType | Dict[str, Any]
    ) -> ModelType:
        """
        Update an existing record.

        Note: db_obj must already have been loaded through get() or a
        similar business-scoped lookup.
        """
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            setattr(db_obj, field, value)

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete_all(self, db: Session, *, business_id: str, commit: bool = True) -> int:
        """
        Delete every record of a business.

        Returns:
            Number of rows deleted
        """
        result = db.execute(
            delete(self.model).where(self.model.business_id == business_id)
        )
        if commit:
            db.commit()
        return result.rowcount

    def delete(self, db: Session, *, id: str, business_id: str) -> Optional[ModelType]:
        """
        Delete a record by ID within a business.

        Returns:
            Deleted model instance or None if not found
        """
        obj = self.get(db=db, id=id, business_id=business_id)
        if obj:
            db.delete(obj)
            db.commit()
        return obj
