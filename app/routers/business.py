from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.business import (
    BusinessResponse,
    BusinessUpdate,
    BusinessAdminUpdate,
    BusinessUpdateResponse,
)
from app.services.business import business_service
from app.core.business_context import get_business_id
from app.dependencies import verify_admin_key
from app.core.logging_config import logger

router = APIRouter()


@router.get("", response_model=BusinessResponse)
def get_business(
    db: Session = Depends(get_db),
    _business_id: str = Depends(get_business_id)
):
    """
    Retrieve the profile of your business.

    Raises:
        HTTPException 404: If business not found
    """
    return business_service.get_business(db, _business_id)


@router.put("", response_model=BusinessResponse)
def update_business(
    data: BusinessUpdate,
    db: Session = Depends(get_db),
    _business_id: str = Depends(get_business_id)
):
    """
    Update your business profile. Only the fields sent are changed.

    Raises:
        HTTPException 404: If business not found
        HTTPException 400: If the phone number belongs to another business
    """
    try:
        logger.info(f"Updating business {_business_id}: fields={sorted(data.model_dump(exclude_unset=True))}")
        return business_service.update_business(db, _business_id, data)
    except Exception as e:
        logger.error(f"Error updating business: {type(e).__name__}: {str(e)}")
        raise


@router.post("/update", response_model=BusinessUpdateResponse)
def admin_update_business(
    data: BusinessAdminUpdate,
    db: Session = Depends(get_db),
    _: None = Depends(verify_admin_key)
):
    """
    Update any business by id. Protected by x-admin-key header.
    """
    logger.info(f"Admin update of business {data.business_id}")
    business = business_service.admin_update_business(db, data)
    return BusinessUpdateResponse(success=True, business=BusinessResponse.model_validate(business))
