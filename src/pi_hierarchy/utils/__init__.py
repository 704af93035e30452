"""Utility functions."""

from .rate_limiter import RateLimiter
from .structured_logging import FilterPairFormatter, StructuredFormatter, setup_structured_logging

__all__ = [
    "RateLimiter",
    "FilterPairFormatter",
    "StructuredFormatter",
    "setup_structured_logging",
]
