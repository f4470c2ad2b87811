from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.program import ProgramCreate, ProgramUpdate, ProgramResponse
from app.services.program import program_service
from app.core.business_context import get_business_id
from app.core.logging_config import logger

router = APIRouter()


@router.post("", response_model=ProgramResponse, status_code=status.HTTP_201_CREATED)
def create_program(
    program_data: ProgramCreate,
    db: Session = Depends(get_db),
    _business_id: str = Depends(get_business_id)
):
    """
    Create a program for your business.

    Raises:
        HTTPException 400: If the name is blank or the extension is taken
    """
    try:
        logger.info(f"Creating program: name={program_data.name}, business_id={_business_id}")
        return program_service.create_program(db=db, program_data=program_data, business_id=_business_id)
    except Exception as e:
        logger.error(f"Error creating program: {type(e).__name__}: {str(e)}")
        raise


@router.get("", response_model=List[ProgramResponse])
def get_programs(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    _business_id: str = Depends(get_business_id)
):
    """
    Retrieve the programs of your business.
    """
    return program_service.get_programs(db=db, business_id=_business_id, skip=skip, limit=limit)


@router.get("/{program_id}", response_model=ProgramResponse)
def get_program(
    program_id: str,
    db: Session = Depends(get_db),
    _business_id: str = Depends(get_business_id)
):
    return program_service.get_program(db=db, program_id=program_id, business_id=_business_id)


@router.put("/{program_id}", response_model=ProgramResponse)
def update_program(
    program_id: str,
    program_data: ProgramUpdate,
    db: Session = Depends(get_db),
    _business_id: str = Depends(get_business_id)
):
    """
    Update a program. Only the fields sent are changed.

    Raises:
        HTTPException 404: If the program is not in your business
        HTTPException 400: If the name is blanked or the extension is taken
    """
    return program_service.update_program(
        db=db,
        program_id=program_id,
        program_data=program_data,
        business_id=_business_id
    )


@router.delete("/{program_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_program(
    program_id: str,
    db: Session = Depends(get_db),
    _business_id: str = Depends(get_business_id)
):
    """
    Delete a program.

    Raises:
        HTTPException 404: If the program is not in your business
    """
    program_service.delete_program(db=db, program_id=program_id, business_id=_business_id)
    return None
