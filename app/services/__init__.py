from app.services.onboarding import onboarding_service
from app.services.business import business_service
from .program import program_service
from .user import user_service
from .voice_context import voice_context_service
from .calendar import calendar_service
from .demo import demo_service

__all__ = [
    "onboarding_service", "business_service", "program_service", "user_service",
    "voice_context_service", "calendar_service", "demo_service",
]
