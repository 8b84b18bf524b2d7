"""Rate limiting adapters.

The document client depends on ``AbstractRateLimiter`` only; the in-process
fixed-window limiter is the default implementation.
"""

from crpt_client.adapters.rate_limit.base import AbstractRateLimiter
from crpt_client.adapters.rate_limit.in_memory import FixedWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "FixedWindowRateLimiter",
]
