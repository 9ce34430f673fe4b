"""
Rate limiting middleware using slowapi
"""
from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
import structlog

from mindspark.config import get_settings

logger = structlog.get_logger()

# Create limiter instance
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000/hour", "100/minute"]
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Answer 429 with the same envelope shape as the question endpoints"""
    client_ip = request.client.host if request.client else "unknown"
    logger.warning(f"Rate limit exceeded for {client_ip}: {exc.detail}")
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": f"Rate limit exceeded: {exc.detail}. Please try again later.",
        },
    )


def ai_generation_limit():
    """Rate limit for question generation endpoints"""
    return limiter.limit(lambda: get_settings().generation_rate_limit)


def general_api_limit():
    """Rate limit for lightweight read endpoints"""
    return limiter.limit("60/minute")
