"""
Credential cache mapping email identities to bearer tokens and back.

Each binding is written as two store entries sharing one deadline:

    token:<identity>    -> credential   (forward)
    email:<credential>  -> identity     (reverse)

Re-binding an identity overwrites the forward entry only. The superseded
credential keeps resolving to its owner until its own TTL lapses.
"""

import logging
import threading
from typing import Optional

from ...errors import InvalidArgument
from .keys import forward_key, is_blank, normalize_identity, reverse_key
from .store import ExpiringStore

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = 24 * 60 * 60


class CredentialCache:
    """
    Two-way expiring cache of identity <-> credential bindings.

    Safe for concurrent use. Writes are serialized by an internal lock;
    reads go straight to the store.
    """

    def __init__(self, store: ExpiringStore, ttl_seconds: int = DEFAULT_TOKEN_TTL):
        """
        Initialize credential cache.

        Args:
            store: Expiring key-value store holding both namespaces
            ttl_seconds: Lifetime of a binding, fixed from creation (24 hours)
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.store = store
        self.ttl_seconds = ttl_seconds
        self._write_lock = threading.Lock()

    def set_token(self, identity: str, credential: str) -> None:
        """
        Bind a credential to an identity.

        Args:
            identity: Email address (any case, surrounding whitespace ignored)
            credential: Bearer token issued by the upstream, stored verbatim

        Raises:
            InvalidArgument: If identity or credential is empty
        """
        if is_blank(identity):
            raise InvalidArgument("identity cannot be empty", "identity")
        if is_blank(credential):
            raise InvalidArgument("credential cannot be empty", "credential")

        canonical = normalize_identity(identity)
        with self._write_lock:
            self.store.set_many(
                {
                    forward_key(canonical): credential,
                    reverse_key(credential): canonical,
                },
                self.ttl_seconds,
            )

        logger.info(f"Token cached for user {canonical}")

    def get_token(self, identity: Optional[str]) -> Optional[str]:
        """Return the live credential for identity, or None."""
        if is_blank(identity):
            return None
        return self.store.get(forward_key(identity))

    def remove_token(self, identity: str) -> None:
        """
        Drop the binding of an identity, both directions.

        Removing an identity without a binding is a no-op.

        Raises:
            InvalidArgument: If identity is empty
        """
        if is_blank(identity):
            raise InvalidArgument("identity cannot be empty", "identity")

        key = forward_key(identity)
        with self._write_lock:
            credential = self.store.get(key)
            if credential is None:
                logger.debug(f"No cached token to remove for user {normalize_identity(identity)}")
                return
            self.store.delete(key, reverse_key(credential))

        logger.info(f"Token removed from cache for user {normalize_identity(identity)}")

    def get_email_by_token(self, credential: Optional[str]) -> Optional[str]:
        """Return the canonical identity bound to credential, or None."""
        if is_blank(credential):
            return None
        return self.store.get(reverse_key(credential))

    def purge_expired(self) -> int:
        """
        Drop expired entries from the backing store.

        Should be called periodically for memory-backed caches.

        Returns:
            Number of entries dropped
        """
        return self.store.purge_expired()
