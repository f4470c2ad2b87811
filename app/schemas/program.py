from datetime import datetime
from pydantic import BaseModel
from typing import Any, Optional


class ProgramBase(BaseModel):
    """Fields a program overrides on top of its business in the voice context"""
    extension: Optional[str] = None
    vertical: Optional[str] = None
    address: Optional[str] = None
    hours: Optional[Any] = None
    services: Optional[Any] = None
    staff: Optional[Any] = None
    faqs: Optional[Any] = None
    promos: Optional[Any] = None
    insurances: Optional[Any] = None
    description: Optional[str] = None
    settings: Optional[Any] = None


class ProgramCreate(ProgramBase):
    name: str


class ProgramUpdate(ProgramBase):
    name: Optional[str] = None


class ProgramResponse(ProgramBase):
    id: str
    business_id: str
    name: str
    created_at: datetime

    class Config:
        from_attributes = True
