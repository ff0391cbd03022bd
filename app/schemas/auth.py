"""Pydantic schemas for authentication."""

from pydantic import BaseModel, EmailStr

from app.models.user import UserRole


class LoginRequest(BaseModel):
    """Credentials presented at login."""

    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """Response schema for the login endpoint."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int


class TokenUser(BaseModel):
    """Lightweight user representation from JWT claims. No DB query needed."""

    id: int
    username: str
    role: UserRole
    email: str = ""
