from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from typing import Any, List, Optional
from app.core.security import MIN_PASSWORD_LENGTH
from app.schemas.user import check_password_size


class BusinessProfileFields(BaseModel):
    """Profile fields editable from the dashboard and read by the voice agent"""
    name: Optional[str] = None
    vertical: Optional[str] = None
    address: Optional[str] = None
    to_number: Optional[str] = None
    hours: Optional[Any] = None
    services: Optional[Any] = None
    staff: Optional[Any] = None
    faqs: Optional[Any] = None
    promos: Optional[Any] = None
    categories: Optional[Any] = None


class BusinessUpdate(BusinessProfileFields):
    pass


class BusinessAdminUpdate(BusinessProfileFields):
    """Ops update: targets any business and may toggle activation"""
    business_id: Optional[str] = None
    is_active: Optional[bool] = None

    class Config:
        extra = "ignore"


class BusinessResponse(BusinessProfileFields):
    id: str
    is_active: bool
    is_demo: bool
    demo_phone_number: Optional[str] = None
    onboarding_step: Optional[int] = None
    onboarding_completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BusinessUpdateResponse(BaseModel):
    success: bool
    business: BusinessResponse


class BusinessListResponse(BaseModel):
    businesses: List[BusinessResponse]
    timestamp: datetime


class BusinessCreateRequest(BaseModel):
    name: str
    to_number: str
    email: str
    vertical: Optional[str] = None
    owner_name: Optional[str] = None
    password: Optional[str] = Field(None, min_length=MIN_PASSWORD_LENGTH)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v):
        return check_password_size(v)


class BusinessCreateResponse(BaseModel):
    success: bool
    business_id: str
    business_name: str
    to_number: str
    user_id: str
    user_email: str
