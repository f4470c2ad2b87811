from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from app.core.security import MAX_PASSWORD_BYTES, MIN_PASSWORD_LENGTH
from app.models.user import UserRole


def check_password_size(password: Optional[str]) -> Optional[str]:
    if password is not None and len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return password


class UserResponse(BaseModel):
    id: str
    email: EmailStr
    business_id: str
    full_name: Optional[str] = None
    role: str
    is_active: Optional[bool] = True
    owner_onboarding_completed: bool = False

    class Config:
        from_attributes = True


class VerifyCredentialsRequest(BaseModel):
    email: EmailStr
    password: str


class VerifyCredentialsResponse(BaseModel):
    user: dict
    access_token: str


class CheckEmailRequest(BaseModel):
    email: EmailStr


class InvitedUser(BaseModel):
    id: str
    email: str
    business_id: str


class CheckEmailResponse(BaseModel):
    exists: bool
    has_auth: Optional[bool] = None
    message: Optional[str] = None
    user: Optional[InvitedUser] = None


class SetPasswordRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v):
        return check_password_size(v)


class SetPasswordResponse(BaseModel):
    success: bool
    user_id: str


class InviteUserRequest(BaseModel):
    email: EmailStr
    business_id: str
    role: UserRole = UserRole.staff


class InviteUserResponse(BaseModel):
    success: bool
    message: str
    user: InvitedUser
