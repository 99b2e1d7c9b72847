"""Security infrastructure adapters."""

from .rate_limit_service import FixedWindowRateLimiter

__all__ = ["FixedWindowRateLimiter"]
