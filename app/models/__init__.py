from .business import Business
from .calendar_connection import CalendarConnection
from .call import Call
from .demo_session import DemoSession
from .patient import Patient
from .program import Program
from .user import User, UserRole
