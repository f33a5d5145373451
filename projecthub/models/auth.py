"""
Authentication request and response schemas
"""

from typing import Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Registration payload; checked by validators.validate_registration"""
    email: Optional[str] = Field(None, description="User email")
    password: Optional[str] = Field(None, description="Password, at least 6 characters")


class LoginRequest(BaseModel):
    """Login payload; checked by validators.validate_login"""
    email: Optional[str] = Field(None, description="User email")
    password: Optional[str] = Field(None, description="User password")


class AuthResponse(BaseModel):
    """Issued bearer token and the identity it was issued for"""
    token: str
    email: str
