"""Rate limiting configuration."""
import os
from slowapi import Limiter
from slowapi.util import get_remote_address

from officeops.core.config import settings


def get_client_ip(request):
    """Get client IP for rate limiting, considering proxies."""
    # X-Forwarded-For can contain multiple IPs, take the first one
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    return get_remote_address(request)


# Uses Redis if REDIS_URL is set (Docker/production), falls back to memory for local dev
limiter = Limiter(
    key_func=get_client_ip,
    default_limits=["300/minute"],
    storage_uri=os.getenv("REDIS_URL", "memory://"),
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)

# Rate limit definitions for different endpoint categories
RATE_LIMITS = {
    "read": "300/minute",
    "write": "60/minute",
    "booking": "30/minute",  # Meeting create/update runs the overlap check under a room lock
    "upload": "30/minute",
    "admin": "10/minute",
}
