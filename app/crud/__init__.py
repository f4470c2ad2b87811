from app.crud.base import CRUDBase
from app.crud.onboarding import onboarding
from .business import business
from .user import user
from .program import program
from .patient import patient
from .call import call
from .demo_session import demo_session
from .calendar_connection import calendar_connection

__all__ = [
    "CRUDBase", "onboarding", "business", "user", "program",
    "patient", "call", "demo_session", "calendar_connection",
]
