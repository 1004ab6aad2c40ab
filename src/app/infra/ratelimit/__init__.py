"""Rate limit do upstream: leitura de headers e limitador de buckets."""

from .buckets import BucketState, InMemoryBucketLimiter
from .headers import RateLimitInfo, parse_rate_limit, rate_limit_headers, retry_delay

__all__ = [
    "BucketState",
    "InMemoryBucketLimiter",
    "RateLimitInfo",
    "parse_rate_limit",
    "rate_limit_headers",
    "retry_delay",
]
