"""Rate limiting configuration."""
import os
from slowapi import Limiter
from slowapi.util import get_remote_address

from assocvote.core.config import settings


def get_client_ip(request):
    """Get client IP for rate limiting, considering proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # X-Forwarded-For can contain multiple IPs, take the first one
        return forwarded.split(",")[0].strip()

    return get_remote_address(request)


# Uses Redis if REDIS_URL is set, falls back to memory for local dev
limiter = Limiter(
    key_func=get_client_ip,
    default_limits=["100/minute"],
    storage_uri=os.getenv("REDIS_URL", "memory://"),
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)

RATE_LIMITS = {
    # A whole general assembly may answer at once from the same venue NAT
    "answer": "300/minute",
    "results": "300/minute",
    "admin_write": "200/minute",
}
