"""Pydantic schemas for registration and login.

The password hash never appears in any response model.
"""

from pydantic import BaseModel

from tasktrack.schemas.common import CamelModel


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class UserRead(CamelModel):
    id: str
    name: str
    email: str


class AuthResponse(UserRead):
    """User fields plus a freshly issued bearer token."""
    token: str
