"""Key normalization helpers for the credential cache."""

from typing import Optional

FORWARD_PREFIX = "token:"
REVERSE_PREFIX = "email:"


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or not value.strip()


def normalize_identity(identity: str) -> str:
    """
    Canonical form of an email identity.

    Example:
        >>> normalize_identity("  User@Example.COM ")
        'user@example.com'
    """
    return identity.strip().lower()


def forward_key(identity: str) -> str:
    """Store key holding the credential bound to an identity."""
    return f"{FORWARD_PREFIX}{normalize_identity(identity)}"


def reverse_key(credential: str) -> str:
    # Credentials are case-sensitive and used verbatim
    return f"{REVERSE_PREFIX}{credential}"
