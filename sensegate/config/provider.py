"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import List, Optional, Protocol

CACHE_BACKENDS = ("memory", "redis")


@dataclass
class CacheConfig:
    """Credential cache configuration."""
    token_ttl_seconds: int
    backend: str
    redis_url: Optional[str]
    purge_interval_seconds: int

    @property
    def uses_redis(self) -> bool:
        """Check if bindings are kept in Redis."""
        return self.backend == "redis"


@dataclass
class UpstreamConfig:
    """openSenseMap API configuration."""
    base_url: str
    timeout: float


@dataclass
class APIConfig:
    """API configuration."""
    port: int
    host: str
    log_level: str
    cors_origins: List[str]


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_cache_config(self) -> CacheConfig:
        """Get credential cache configuration."""
        ...

    def get_upstream_config(self) -> UpstreamConfig:
        """Get upstream API configuration."""
        ...

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_cache_config(self) -> CacheConfig:
        """
        Get credential cache configuration from environment variables.

        Raises:
            ValueError: If the TTL is not a positive integer or the backend is unknown
        """
        ttl = int(os.getenv("TOKEN_TTL_SECONDS", "86400"))
        if ttl <= 0:
            raise ValueError(f"TOKEN_TTL_SECONDS must be positive, got {ttl}")

        backend = os.getenv("CACHE_BACKEND", "memory").strip().lower()
        if backend not in CACHE_BACKENDS:
            raise ValueError(
                f"CACHE_BACKEND must be one of {', '.join(CACHE_BACKENDS)}, got {backend!r}"
            )

        return CacheConfig(
            token_ttl_seconds=ttl,
            backend=backend,
            redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
            purge_interval_seconds=int(os.getenv("CACHE_PURGE_INTERVAL", "300")),
        )

    def get_upstream_config(self) -> UpstreamConfig:
        """Get upstream API configuration from environment variables."""
        return UpstreamConfig(
            base_url=os.getenv("OPENSENSEMAP_BASE_URL", "https://api.opensensemap.org").rstrip("/"),
            timeout=float(os.getenv("OPENSENSEMAP_TIMEOUT", "30")),
        )

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(
            port=int(os.getenv("API_PORT", "8080")),
            host=os.getenv("API_HOST", "0.0.0.0"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=[origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()],
        )
