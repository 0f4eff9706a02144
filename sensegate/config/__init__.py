from .provider import (
    APIConfig,
    CacheConfig,
    ConfigProvider,
    EnvConfigProvider,
    UpstreamConfig,
)

__all__ = ["APIConfig", "CacheConfig", "ConfigProvider", "EnvConfigProvider", "UpstreamConfig"]
