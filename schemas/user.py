# schemas/user.py
"""
Pydantic schemas for authentication, user administration and profile.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from models.user import UserRole


class LoginRequest(BaseModel):
     email: str = Field(..., min_length=3)
     password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
     """Admin-only account creation."""
     full_name: str = Field(..., min_length=2, max_length=200)
     email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
     password: str = Field(..., min_length=6, max_length=128)
     role: UserRole = UserRole.EMPLOYEE
     phone: Optional[str] = Field(None, max_length=50)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "full_name": "Jane Manager",
                    "email": "jane@landlordpro.rw",
                    "password": "secret123",
                    "role": "manager"
               }
          }
     )


class UserUpdate(BaseModel):
     """Admin edit of another account."""
     full_name: Optional[str] = Field(None, min_length=2, max_length=200)
     email: Optional[str] = Field(None, min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
     role: Optional[UserRole] = None
     phone: Optional[str] = Field(None, max_length=50)


class ProfileUpdate(BaseModel):
     full_name: Optional[str] = Field(None, min_length=2, max_length=200)
     email: Optional[str] = Field(None, min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
     phone: Optional[str] = Field(None, max_length=50)


class PasswordChange(BaseModel):
     current_password: str = Field(..., min_length=1)
     new_password: str = Field(..., min_length=6, max_length=128)


class UserResponse(BaseModel):
     id: int
     full_name: str
     email: str
     role: UserRole
     phone: Optional[str] = None
     avatar: Optional[str] = None
     is_active: bool
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
     success: bool = True
     token: str
     user: UserResponse
