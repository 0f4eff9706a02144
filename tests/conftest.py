"""
Shared pytest fixtures for SenseGate tests.

This module provides common fixtures including:
- FakeClock: Manually advanced time source for expiry tests
- StaticConfigProvider: In-code configuration without environment variables
- FakeUpstream: Recording stand-in for the openSenseMap client
"""

import os
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sensegate.config.provider import APIConfig, CacheConfig, UpstreamConfig
from sensegate.errors import UpstreamError
from sensegate.modules.cache import CredentialCache, MemoryStore
from sensegate.modules.auth import SessionService


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class StaticConfigProvider:
    """ConfigProvider returning fixed values."""

    cache: CacheConfig = field(
        default_factory=lambda: CacheConfig(
            token_ttl_seconds=86400,
            backend="memory",
            redis_url=None,
            purge_interval_seconds=0,
        )
    )
    upstream: UpstreamConfig = field(
        default_factory=lambda: UpstreamConfig(base_url="https://osem.test", timeout=5.0)
    )
    api: APIConfig = field(
        default_factory=lambda: APIConfig(port=8080, host="127.0.0.1", log_level="INFO", cors_origins=["*"])
    )

    def get_cache_config(self) -> CacheConfig:
        return self.cache

    def get_upstream_config(self) -> UpstreamConfig:
        return self.upstream

    def get_api_config(self) -> APIConfig:
        return self.api


class FakeUpstream:
    """
    Records upstream calls and answers with canned results.

    Tokens are issued per email from `tokens`; `fail_register`, `fail_sign_in`
    and `fail_sign_out` make the corresponding call raise UpstreamError.
    """

    def __init__(self, tokens: Optional[Dict[str, str]] = None):
        self.tokens = tokens or {}
        self.fail_sign_in: Optional[UpstreamError] = None
        self.fail_sign_out: Optional[UpstreamError] = None
        self.fail_register: Optional[UpstreamError] = None
        self.register_calls: List[Tuple[str, str, str]] = []
        self.sign_in_calls: List[Tuple[str, str]] = []
        self.sign_out_calls: List[str] = []
        self.closed = False

    async def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        self.register_calls.append((name, email, password))
        if self.fail_register:
            raise self.fail_register
        return {"code": "created", "message": "Successfully registered new user."}

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        self.sign_in_calls.append((email, password))
        if self.fail_sign_in:
            raise self.fail_sign_in
        return {
            "code": "Authorized",
            "message": "Successfully signed in",
            "token": self.tokens.get(email, f"token-for-{email}"),
            "refreshToken": "refresh-123",
        }

    async def sign_out(self, token: str) -> Dict[str, Any]:
        self.sign_out_calls.append(token)
        if self.fail_sign_out:
            raise self.fail_sign_out
        return {"code": "Ok", "message": "Successfully signed out"}

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return MemoryStore(clock=clock)


@pytest.fixture
def cache(store):
    return CredentialCache(store)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def session_service(cache, upstream):
    return SessionService(cache, upstream)


@pytest.fixture
def config_provider():
    return StaticConfigProvider()
