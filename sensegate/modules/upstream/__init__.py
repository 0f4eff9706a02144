"""
Upstream Module - Black Box Interface

Purpose: Talk to the openSenseMap API for registration, sign-in and sign-out
Interface: OpenSenseMapClient.register(), sign_in(), sign_out(), aclose()
Hidden: HTTP transport, status handling, connection pooling
"""

from .client import OpenSenseMapClient, UpstreamClient

__all__ = ["OpenSenseMapClient", "UpstreamClient"]
