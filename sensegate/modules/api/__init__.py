"""
API Module - Black Box Interface

Purpose: HTTP request/response models and dependencies
Interface: LoginRequest, RegisterRequest, ApiResponse, get_session_service(), require_upstream_token()
Hidden: Header extraction, service lookup on application state

The API module only orchestrates - it contains no business logic.
"""

from .dependencies import get_session_service, require_upstream_token
from .models import ApiResponse, LoginRequest, RegisterRequest

__all__ = ["ApiResponse", "LoginRequest", "RegisterRequest", "get_session_service", "require_upstream_token"]
