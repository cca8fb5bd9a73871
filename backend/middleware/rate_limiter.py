import logging
import os
import time
from fastapi import Request, HTTPException

from utils import get_client_ip

logger = logging.getLogger(__name__)

RATE_LIMIT_PER_MINUTE = int(os.getenv("RATE_LIMIT_PER_MINUTE", "15"))


class RateLimiter:
    """
    In-memory sliding window rate limiter keyed by resolved client IP.

    Note: limits are per-process. Each uvicorn worker keeps its own counts,
    and clients that spoof forwarded headers get their own buckets.
    """

    def __init__(self, requests_per_minute: int = RATE_LIMIT_PER_MINUTE, window_seconds: int = 60):
        self.requests_per_minute = requests_per_minute
        self.window_seconds = window_seconds
        self.requests: dict[str, list[float]] = {}
        self.last_sweep = time.time()

    def _prune(self, client_ip: str, cutoff: float) -> None:
        """Drop timestamps at or before cutoff; forget the client if none remain."""
        fresh = [ts for ts in self.requests.get(client_ip, ()) if ts > cutoff]
        if fresh:
            self.requests[client_ip] = fresh
        else:
            self.requests.pop(client_ip, None)

    def _sweep(self, current_time: float) -> None:
        """Prune every client, at most once per window."""
        if current_time - self.last_sweep < self.window_seconds:
            return
        cutoff = current_time - self.window_seconds
        for client_ip in list(self.requests):
            self._prune(client_ip, cutoff)
        self.last_sweep = current_time

    def check_rate_limit(self, request: Request) -> str:
        """
        Count a request against its client IP.

        Returns:
            The resolved client IP

        Raises:
            HTTPException: 429 if rate limit exceeded
        """
        client_ip = get_client_ip(request)
        current_time = time.time()

        self._sweep(current_time)
        self._prune(client_ip, current_time - self.window_seconds)

        client_requests = self.requests.setdefault(client_ip, [])
        if len(client_requests) >= self.requests_per_minute:
            logger.warning(f"Rate limit exceeded for {client_ip}")
            raise HTTPException(
                status_code=429,
                detail=f"Rate limit exceeded. Maximum {self.requests_per_minute} requests per minute.",
                headers={"Retry-After": str(self.window_seconds)}
            )

        client_requests.append(current_time)
        return client_ip


# Global rate limiter instance
rate_limiter = RateLimiter()
