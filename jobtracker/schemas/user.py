from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from jobtracker.models.users import UserRole
from jobtracker.schemas.common import CamelRequest, CamelResponse
from jobtracker.utils.hashing import MAX_PASSWORD_BYTES


def check_password_length(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
    return value

# Schema for user authentication credentials; presence is checked by the route
class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

# Schema for account creation requests (admin only)
class UserCreate(CamelRequest):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    role: UserRole
    party_name: Optional[str] = None
    transporter_name: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool = True

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, v):
        return check_password_length(v)

# Partial update; omitted fields keep their stored value
class UserUpdate(CamelRequest):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    role: Optional[UserRole] = None
    party_name: Optional[str] = None
    transporter_name: Optional[str] = None
    phone: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, v):
        return check_password_length(v)

# Output schema for user profile details, never carries the password hash
class UserResponse(CamelResponse):
    id: int
    email: str
    name: str
    role: str
    party_name: Optional[str] = None
    transporter_name: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# Successful login payload
class LoginResponse(CamelResponse):
    user: UserResponse
    token: str
    token_type: str = "bearer"

# Schema for JWT payload contents, i.e. the authenticated identity
class TokenData(CamelResponse):
    user_id: int
    email: str
    role: str
    party_name: Optional[str] = None
    transporter_name: Optional[str] = None
