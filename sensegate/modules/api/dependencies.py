"""
FastAPI dependencies resolving the session service and caller tokens.

require_upstream_token is the extension point for handlers that forward a
caller's request upstream: declare it as a dependency and the handler
receives the cached bearer token, or the caller gets a 401.
"""

from typing import Optional

from fastapi import Header, HTTPException, Request

from ..auth import SessionService


def get_session_service(request: Request) -> SessionService:
    """Session service owned by the running application."""
    service = getattr(request.app.state, "session_service", None)
    if service is None:
        raise HTTPException(503, "Service not initialized")
    return service


def require_upstream_token(
    request: Request,
    x_user_email: Optional[str] = Header(None, description="Email of the logged-in caller"),
) -> str:
    """
    Resolve the caller's cached upstream token.

    Raises NotAuthenticated (answered with 401) when the caller has no
    active session.
    """
    return get_session_service(request).authorize(x_user_email)
