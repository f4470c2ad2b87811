from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from app.crud.program import program as program_crud
from app.models.program import Program
from app.schemas.program import ProgramCreate, ProgramUpdate
from app.core.logging_config import logger


class ProgramService:
    """
    Service layer for programs, the extension-reachable lines of a business.

    Every operation is scoped to the business_id taken from the caller's token.
    """

    def __init__(self):
        self.crud = program_crud

    def get_program(self, db: Session, program_id: str, business_id: str) -> Program:
        """
        Raises:
            HTTPException 404: If the program does not exist in this business
        """
        program = self.crud.get(db=db, id=program_id, business_id=business_id)
        if not program:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Program not found"
            )
        return program

    def get_programs(self, db: Session, business_id: str, skip: int = 0, limit: int = 100) -> List[Program]:
        return self.crud.get_multi(db=db, skip=skip, limit=limit, business_id=business_id)

    def _ensure_extension_available(
        self,
        db: Session,
        business_id: str,
        extension: Optional[str],
        program_id: Optional[str] = None
    ) -> None:
        if not extension:
            return
        existing = self.crud.get_by_extension(db, business_id, extension)
        if existing is not None and existing.id != program_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Extension {extension} is already used by another program"
            )

    def create_program(self, db: Session, program_data: ProgramCreate, business_id: str) -> Program:
        """
        Raises:
            HTTPException 400: If the name is blank or the extension is taken
        """
        if not program_data.name.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Name is required"
            )
        self._ensure_extension_available(db, business_id, program_data.extension)

        program = self.crud.create(db=db, obj_in=program_data, business_id=business_id)
        logger.info(f"Created program {program.id} ({program.name}) for business {business_id}")
        return program

    def update_program(
        self,
        db: Session,
        program_id: str,
        program_data: ProgramUpdate,
        business_id: str
    ) -> Program:
        """
        Partially update a program.

        Raises:
            HTTPException 404: If the program does not exist in this business
            HTTPException 400: If the name is blanked or the extension is taken
        """
        program = self.get_program(db, program_id, business_id)
        update_data = program_data.model_dump(exclude_unset=True)

        if "name" in update_data and not (update_data["name"] or "").strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Name is required"
            )
        self._ensure_extension_available(db, business_id, update_data.get("extension"), program_id=program.id)

        return self.crud.update(db=db, db_obj=program, obj_in=update_data)

    def delete_program(self, db: Session, program_id: str, business_id: str) -> None:
        """
        Raises:
            HTTPException 404: If the program does not exist in this business
        """
        program = self.crud.delete(db=db, id=program_id, business_id=business_id)
        if not program:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Program not found"
            )
        logger.info(f"Deleted program {program_id} of business {business_id}")


# Create a singleton instance
program_service = ProgramService()
