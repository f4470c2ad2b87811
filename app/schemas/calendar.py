from pydantic import BaseModel
from typing import Optional


class CalendarConnectResponse(BaseModel):
    auth_url: str


class OAuthState(BaseModel):
    """Round-tripped through Google in the OAuth `state` parameter"""
    business_id: str
    program_id: Optional[str] = None
