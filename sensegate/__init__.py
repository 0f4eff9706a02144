"""
SenseGate - openSenseMap Authentication Broker

Authenticates callers by email against the openSenseMap API and keeps
their bearer tokens in an expiring, two-way cache.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- All communication through defined interfaces

Modules:
- cache: Identity <-> credential cache with TTL eviction
- upstream: openSenseMap HTTP client
- auth: Login/logout/authorize flows over the cache
- api: REST models and dependencies
"""

__version__ = "1.0.0"
