"""Pydantic schemas for authentication endpoints"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    """Request schema for user login."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Response schema for successful login.

    Attributes:
        access_token: Signed JWT
        token_type: Token type (always "bearer")
        expires_in: Token expiry in seconds
    """
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class PrincipalResponse(BaseModel):
    """The authenticated principal as seen by the API."""
    id: int
    name: str
    email: str
    role: str
    tenant_id: Optional[int] = None
    bypass: bool = False
