"""
Cache Module - Black Box Interface

Purpose: Keep identity <-> credential bindings with TTL eviction
Interface: set_token(), get_token(), remove_token(), get_email_by_token()
Hidden: Key layout, expiry bookkeeping, storage backend

Replaceable with any backend that satisfies ExpiringStore (in-memory, Redis).
"""

from .credential_cache import DEFAULT_TOKEN_TTL, CredentialCache
from .keys import forward_key, is_blank, normalize_identity, reverse_key
from .store import ExpiringStore, MemoryStore, RedisStore

__all__ = [
    "CredentialCache",
    "DEFAULT_TOKEN_TTL",
    "ExpiringStore",
    "MemoryStore",
    "RedisStore",
    "forward_key",
    "is_blank",
    "normalize_identity",
    "reverse_key",
]
