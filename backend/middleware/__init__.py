from .rate_limiter import RateLimiter, rate_limiter

__all__ = ["RateLimiter", "rate_limiter"]
