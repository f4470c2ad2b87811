from typing import List
from sqlalchemy.orm import Session
from sqlalchemy import select
from pydantic import BaseModel
from app.crud.base import CRUDBase
from app.models.patient import Patient


class CRUDPatient(CRUDBase[Patient, BaseModel, BaseModel]):

    def get_recent(self, db: Session, business_id: str, limit: int = 5) -> List[Patient]:
        """Most recently called patients first; never-called ones last, newest first."""
        stmt = (
            select(Patient)
            .where(Patient.business_id == business_id)
            .order_by(
                Patient.last_call_date.desc().nulls_last(),
                Patient.created_at.desc()
            )
            .limit(limit)
        )
        return list(db.execute(stmt).scalars().all())


# Create a singleton instance
patient = CRUDPatient(Patient)
