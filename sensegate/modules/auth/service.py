"""
Session Service Facade following Black Box Design principles.

This module provides:
- The login flow: upstream sign-in, then bind the issued token
- The logout flow: reverse lookup, upstream sign-out, then unbind
- Registration pass-through to the upstream
- Caller authorization by email for requests forwarded upstream
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Optional, TypeVar

from ...errors import NotAuthenticated, UpstreamError
from ..cache import CredentialCache, is_blank
from ..upstream import UpstreamClient

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "

T = TypeVar("T")


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an Authorization header value.

    The scheme is matched case-insensitively; the token is returned verbatim
    apart from surrounding whitespace.

    Returns:
        Token string, or None if the header is missing, not Bearer, or empty
    """
    if is_blank(authorization) or not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


class SessionService:
    """
    Facade over the credential cache and the upstream client.

    The API layer only talks to this class; it never touches the cache
    or the upstream directly.
    """

    def __init__(self, cache: CredentialCache, upstream: UpstreamClient):
        self.cache = cache
        self.upstream = upstream

    async def _cache_call(self, operation: Callable[..., T], *args: Any) -> T:
        # Stores doing network I/O run off the event loop
        if getattr(self.cache.store, "io_bound", False):
            return await asyncio.to_thread(operation, *args)
        return operation(*args)

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Log in upstream and cache the issued token.

        Args:
            email: User email
            password: User password, passed through to the upstream

        Returns:
            Upstream login response

        Raises:
            UpstreamError: If the upstream rejects the login or omits the token
            InvalidArgument: If email is empty
        """
        result = await self.upstream.sign_in(email, password)

        token = result.get("token") if isinstance(result, dict) else None
        if not isinstance(token, str) or is_blank(token):
            raise UpstreamError("Invalid login response from server", status_code=502)

        await self._cache_call(self.cache.set_token, email, token)
        logger.info(f"User {email} logged in successfully and token cached")
        return result

    async def logout(self, authorization: Optional[str]) -> Dict[str, Any]:
        """
        Log out the owner of a presented bearer token.

        The binding is only dropped after the upstream sign-out succeeds.

        Raises:
            NotAuthenticated: If the header is malformed or the token is unknown
            UpstreamError: If the upstream sign-out fails
        """
        if is_blank(authorization) or not authorization.lower().startswith(BEARER_PREFIX):
            raise NotAuthenticated("Authorization header with Bearer token is required")

        token = extract_bearer_token(authorization)
        if token is None:
            raise NotAuthenticated("Invalid token")

        email = await self._cache_call(self.cache.get_email_by_token, token)
        if is_blank(email):
            raise NotAuthenticated("User is not authenticated or token has expired")

        result = await self.upstream.sign_out(token)

        await self._cache_call(self.cache.remove_token, email)
        logger.info(f"User {email} logged out successfully and token cleared")
        return result

    def authorize(self, email: Optional[str]) -> str:
        """
        Resolve a caller's cached upstream token.

        Synchronous; FastAPI runs sync dependencies in its threadpool, so an
        I/O-backed store does not block the event loop here.

        Raises:
            NotAuthenticated: If the caller has no live binding
        """
        token = self.cache.get_token(email)
        if token is None:
            raise NotAuthenticated("User is not authenticated. Please login first.")
        return token

    async def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        """
        Register a new upstream user.

        Registration does not log the user in; nothing is cached.
        """
        return await self.upstream.register(name, email, password)

    async def purge_expired(self) -> int:
        """Drop expired bindings, off the event loop for I/O-backed stores."""
        return await self._cache_call(self.cache.purge_expired)

    async def close(self) -> None:
        """Release upstream resources."""
        aclose = getattr(self.upstream, "aclose", None)
        if aclose is not None:
            await aclose()
