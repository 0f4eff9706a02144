"""
Session Factory following Black Box Design principles.

This factory:
- Picks the cache backend from configuration
- Wires cache and upstream client into the session service
- Returns only the service facade
"""

import logging
from typing import Any, Optional

import redis

from ...config.provider import ConfigProvider
from ..cache import CredentialCache, ExpiringStore, MemoryStore, RedisStore
from ..upstream import OpenSenseMapClient, UpstreamClient
from .service import SessionService

logger = logging.getLogger(__name__)


class SessionFactory:
    """
    Composition root for the session stack.

    Nothing here is a module-level singleton; the caller owns the returned
    service for the lifetime of the process.
    """

    @staticmethod
    def build_store(config_provider: ConfigProvider, redis_client: Optional[Any] = None) -> ExpiringStore:
        """
        Build the expiring store selected by configuration.

        Args:
            config_provider: Configuration provider
            redis_client: Optional pre-built Redis client (redis backend only)
        """
        cache_config = config_provider.get_cache_config()
        if cache_config.uses_redis:
            logger.info("Building credential cache on Redis")
            if redis_client is None:
                redis_client = redis.Redis.from_url(cache_config.redis_url, decode_responses=True)
            return RedisStore(redis_client)

        logger.info("Building credential cache in memory")
        return MemoryStore()

    @staticmethod
    def build(
        config_provider: ConfigProvider,
        upstream: Optional[UpstreamClient] = None,
        redis_client: Optional[Any] = None,
    ) -> SessionService:
        """
        Build the complete session stack.

        Args:
            config_provider: Configuration provider
            upstream: Optional upstream client (defaults to OpenSenseMapClient)
            redis_client: Optional Redis client for the redis backend

        Returns:
            SessionService facade
        """
        cache_config = config_provider.get_cache_config()
        store = SessionFactory.build_store(config_provider, redis_client)
        cache = CredentialCache(store, ttl_seconds=cache_config.token_ttl_seconds)

        if upstream is None:
            upstream_config = config_provider.get_upstream_config()
            upstream = OpenSenseMapClient(
                base_url=upstream_config.base_url, timeout=upstream_config.timeout
            )

        return SessionService(cache, upstream)
