from datetime import datetime
from pydantic import BaseModel
from typing import Any, List, Optional


class DemoCreateRequest(BaseModel):
    email: Optional[str] = None
    phone: Optional[str] = None


class DemoCreateResponse(BaseModel):
    success: bool
    session_id: str
    session_token: str
    expires_at: datetime
    demo_link: str


class DemoUnavailableResponse(BaseModel):
    available: bool = False
    next_available_in: int
    message: str


class DemoSessionUpdate(BaseModel):
    email: Optional[str] = None
    phone: Optional[str] = None
    is_active: Optional[bool] = None


class DemoSessionResponse(BaseModel):
    id: str
    session_token: str
    email: Optional[str] = None
    phone: Optional[str] = None
    expires_at: datetime
    is_active: bool
    demo_business_id: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class DemoSessionState(DemoSessionResponse):
    """Session as seen by the demo page, with timer and queue details"""
    is_expired: bool
    remaining_seconds: int
    remaining_minutes: int
    active_session_expires_at: Optional[datetime] = None
    queue_position: Optional[int] = None


class DemoSessionEnvelope(BaseModel):
    session: DemoSessionState


class DemoSessionUpdateResponse(BaseModel):
    success: bool
    session: DemoSessionResponse


class DemoBusinessRequest(BaseModel):
    name: str
    vertical: Optional[str] = None
    categories: Optional[Any] = None
    hours: Optional[Any] = None
    faqs: Optional[Any] = None


class PatientResponse(BaseModel):
    id: str
    business_id: str
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    last_call_date: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class DemoPatientsResponse(BaseModel):
    patients: List[PatientResponse]
    count: int


class DemoCleanupResponse(BaseModel):
    success: bool
    deleted: dict
    message: str
