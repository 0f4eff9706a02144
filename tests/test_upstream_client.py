"""
Unit tests for the openSenseMap client.

The HTTP layer is replaced with httpx.MockTransport, so no network is used.
"""

import json

import httpx
import pytest

from sensegate.errors import UpstreamError
from sensegate.modules.upstream import OpenSenseMapClient


def make_client(handler) -> OpenSenseMapClient:
    return OpenSenseMapClient(base_url="https://osem.test", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_sign_in_posts_credentials():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"code": "Authorized", "token": "tok-1"})

    client = make_client(handler)
    result = await client.sign_in("a@b.com", "secret")
    await client.aclose()

    assert result == {"code": "Authorized", "token": "tok-1"}
    assert seen["method"] == "POST"
    assert seen["url"] == "https://osem.test/users/sign-in"
    assert seen["body"] == {"email": "a@b.com", "password": "secret"}


@pytest.mark.asyncio
async def test_sign_in_rejected_carries_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, text="User and or password not valid!")

    client = make_client(handler)
    with pytest.raises(UpstreamError) as exc_info:
        await client.sign_in("a@b.com", "wrong")
    await client.aclose()

    assert exc_info.value.status_code == 403
    assert "Login failed" in str(exc_info.value)


@pytest.mark.asyncio
async def test_sign_in_invalid_json():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="not json")

    client = make_client(handler)
    with pytest.raises(UpstreamError) as exc_info:
        await client.sign_in("a@b.com", "secret")
    await client.aclose()

    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_connection_error_maps_to_502():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(UpstreamError) as exc_info:
        await client.sign_in("a@b.com", "secret")
    await client.aclose()

    assert exc_info.value.status_code == 502
    assert "Failed to connect" in str(exc_info.value)


@pytest.mark.asyncio
async def test_sign_out_sends_bearer_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["authorization"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"code": "Ok", "message": "Successfully signed out"})

    client = make_client(handler)
    result = await client.sign_out("tok-1")
    await client.aclose()

    assert result["code"] == "Ok"
    assert seen["url"] == "https://osem.test/users/sign-out"
    assert seen["authorization"] == "Bearer tok-1"


@pytest.mark.asyncio
async def test_sign_out_empty_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    client = make_client(handler)
    result = await client.sign_out("tok-1")
    await client.aclose()

    assert result == {"message": "Logged out successfully"}


@pytest.mark.asyncio
async def test_sign_out_rejected():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="Unauthorized")

    client = make_client(handler)
    with pytest.raises(UpstreamError) as exc_info:
        await client.sign_out("tok-1")
    await client.aclose()

    assert exc_info.value.status_code == 401
    assert "Logout failed" in str(exc_info.value)


@pytest.mark.asyncio
async def test_register_posts_user_details():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"code": "created", "token": "tok-new"})

    client = make_client(handler)
    result = await client.register("Test User", "a@b.com", "password123")
    await client.aclose()

    assert result == {"code": "created", "token": "tok-new"}
    assert seen["url"] == "https://osem.test/users/register"
    assert seen["body"] == {"name": "Test User", "email": "a@b.com", "password": "password123"}


@pytest.mark.asyncio
async def test_register_empty_body_falls_back_to_created():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(201)

    client = make_client(handler)
    result = await client.register("Test User", "a@b.com", "password123")
    await client.aclose()

    assert result == {"code": "created", "message": "User registered successfully"}


@pytest.mark.asyncio
async def test_register_rejected_carries_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, text="Duplicate user detected")

    client = make_client(handler)
    with pytest.raises(UpstreamError) as exc_info:
        await client.register("Test User", "a@b.com", "password123")
    await client.aclose()

    assert exc_info.value.status_code == 422
    assert "Registration failed" in str(exc_info.value)
