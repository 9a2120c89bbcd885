"""
Rate limiting for public write endpoints.

Uses slowapi with in-memory storage keyed by client address. For production
with multiple workers, construct the Limiter with storage_uri="redis://...".
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from . import config

limiter = Limiter(key_func=get_remote_address, enabled=config.RATE_LIMIT_ENABLED)
