"""
Pydantic models for account data.

Defines schemas for registering, logging in and reading accounts.
Passwords only ever travel inward: no response schema carries one.
Request fields are optional at the schema level so that missing or
empty values reach ``IdentityService`` and are reported with its
messages rather than FastAPI's generic validation output.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Schema for registering an account."""

    name: Optional[str] = Field(None, examples=["Jane Doe"])
    email: Optional[str] = Field(None, examples=["jane@example.com"])
    password: Optional[str] = Field(None, examples=["secret1"])


class LoginRequest(BaseModel):
    email: Optional[str] = Field(None, examples=["jane@example.com"])
    password: Optional[str] = Field(None, examples=["secret1"])


class AccountRead(BaseModel):
    """Schema for reading an account from the API."""

    id: str
    email: str
    name: str
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
    }


class AuthResponse(BaseModel):
    """Body returned by registration and login."""

    account: AccountRead
    token: str
