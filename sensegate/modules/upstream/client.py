"""HTTP client for the openSenseMap user endpoints."""

import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from ...errors import UpstreamError

logger = logging.getLogger(__name__)


class UpstreamClient(Protocol):
    """Protocol for the upstream calls the session service depends on."""

    async def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        ...

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        ...

    async def sign_out(self, token: str) -> Dict[str, Any]:
        ...


class OpenSenseMapClient:
    """
    Async client for the openSenseMap user endpoints.

    Non-2xx answers raise UpstreamError carrying the upstream status code;
    connection failures raise UpstreamError with 502.
    """

    def __init__(
        self,
        base_url: str = "https://api.opensensemap.org",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize client.

        Args:
            base_url: openSenseMap API root
            timeout: Request timeout in seconds
            transport: Optional transport override (httpx.MockTransport in tests)
        """
        self.base_url = base_url
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        """
        Create a new openSenseMap user.

        Returns:
            Decoded response body, or a "created" stub when the upstream sends none
        """
        logger.info(f"Attempting to register user with email: {email}")
        body = await self._post(
            "/users/register",
            "Registration",
            json={"name": name, "email": email, "password": password},
        )
        logger.info(f"User registered successfully: {email}")
        return body or {"code": "created", "message": "User registered successfully"}

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        """
        Log a user in.

        Returns:
            Decoded response body; the bearer token is under "token"
        """
        logger.info(f"Attempting to login user with email: {email}")
        body = await self._post("/users/sign-in", "Login", json={"email": email, "password": password})
        logger.info(f"User logged in successfully: {email}")
        return body

    async def sign_out(self, token: str) -> Dict[str, Any]:
        """Invalidate a bearer token upstream."""
        logger.info("Attempting to logout user")
        body = await self._post(
            "/users/sign-out", "Logout", headers={"Authorization": f"Bearer {token}"}
        )
        logger.info("User logged out successfully")
        return body or {"message": "Logged out successfully"}

    async def _post(self, path: str, action: str, **kwargs) -> Dict[str, Any]:
        try:
            response = await self._client.post(path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"HTTP request error during {action.lower()}: {e}")
            raise UpstreamError("Failed to connect to OpenSenseMap API", status_code=502) from e

        if response.is_error:
            logger.error(f"{action} failed with status {response.status_code}: {response.text}")
            raise UpstreamError(f"{action} failed: {response.text}", status_code=response.status_code)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid {action.lower()} response from server", status_code=502) from e

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()
