from pydantic import BaseModel
from typing import Any, Optional


class VoiceBusinessContext(BaseModel):
    """Business profile handed to the voice agent for an inbound number"""
    id: str
    name: Optional[str] = None
    vertical: Optional[str] = None
    address: Optional[str] = None
    hours: Optional[Any] = None
    services: Optional[Any] = None
    insurances: Optional[Any] = None
    staff: Optional[Any] = None
    faqs: Optional[Any] = None
    promos: Optional[Any] = None
    to_number: Optional[str] = None


class BusinessContext(BaseModel):
    """Business defaults merged with the program reached by extension"""
    business_id: Optional[str] = None
    business_name: Optional[str] = None
    business_phone: Optional[str] = None
    vertical: Optional[str] = None
    address: Optional[str] = None
    hours: Optional[Any] = None
    services: Optional[Any] = None
    staff: Optional[Any] = None
    faqs: Optional[Any] = None
    promos: Optional[Any] = None
    insurances: Optional[Any] = None
    program_id: Optional[str] = None
    program_name: Optional[str] = None
    extension: Optional[str] = None
    program_description: Optional[str] = None
    program_settings: Optional[Any] = None

    def as_payload(self) -> dict:
        """Program keys only appear when a program matched."""
        payload = self.model_dump(mode="json")
        for key in PROGRAM_KEYS:
            if payload.get(key) is None:
                payload.pop(key, None)
        return payload


PROGRAM_KEYS = ("program_id", "program_name", "extension", "program_description", "program_settings")
