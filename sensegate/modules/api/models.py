"""
SenseGate API data models.

These models define the request and response bodies of the HTTP surface.
Upstream response bodies are passed through untouched.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


def _clean_email(v: str) -> str:
    v = v.strip()
    if "@" not in v:
        raise ValueError("email must be a valid email address")
    return v


class LoginRequest(BaseModel):
    """Credentials forwarded to the openSenseMap sign-in endpoint."""

    email: str = Field(..., description="User email", min_length=3, max_length=254)
    password: str = Field(..., description="User password", min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _clean_email(v)


class RegisterRequest(BaseModel):
    """New user details forwarded to the openSenseMap register endpoint."""

    name: str = Field(..., description="Display name", min_length=1, max_length=100)
    email: str = Field(..., description="User email", min_length=3, max_length=254)
    password: str = Field(..., description="User password", min_length=8)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _clean_email(v)


class ApiResponse(BaseModel):
    """Envelope for broker-generated responses."""

    success: bool
    message: str
    data: Optional[Any] = None
    errors: List[str] = Field(default_factory=list)

    @classmethod
    def success_response(cls, data: Any = None, message: str = "") -> "ApiResponse":
        return cls(success=True, message=message, data=data)

    @classmethod
    def failure_response(cls, message: str, errors: Optional[List[str]] = None) -> "ApiResponse":
        return cls(success=False, message=message, errors=errors if errors is not None else [message])
