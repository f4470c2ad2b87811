from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import select
from app.crud.base import CRUDBase
from app.models.program import Program
from app.schemas.program import ProgramCreate, ProgramUpdate


class CRUDProgram(CRUDBase[Program, ProgramCreate, ProgramUpdate]):
    """
    CRUD operations for Program model.

    Inherits business-scoped get, get_multi, create, update and delete
    from CRUDBase.
    """

    def get_by_extension(self, db: Session, business_id: str, extension: str) -> Optional[Program]:
        stmt = select(Program).where(
            Program.business_id == business_id,
            Program.extension == extension
        )
        return db.execute(stmt).scalars().first()


# Create a singleton instance
program = CRUDProgram(Program)
