"""
Authentication Module - Black Box Interface

Purpose: Login, logout and caller authorization over the credential cache
Interface: SessionService.login(), logout(), authorize(); SessionFactory.build()
Hidden: Cache backend selection, upstream client wiring, header parsing
"""

from .factory import SessionFactory
from .service import SessionService, extract_bearer_token

__all__ = ["SessionFactory", "SessionService", "extract_bearer_token"]
